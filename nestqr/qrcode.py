import logging
from dataclasses import dataclass

from PIL import Image, ImageDraw

import nestqr.constants as constants
import nestqr.util as util
from nestqr.errors import PayloadTooLargeError
from nestqr.matrix import QRMatrix

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EncodeResult:
    '''
    인코딩 결과
    truncated가 True면 payload 뒤쪽 dropped 바이트가 잘려서 인코딩됨
    '''
    matrix: list
    version: int
    payload: bytes
    truncated: bool = False
    dropped: int = 0

    @property
    def size(self):
        return len(self.matrix)


def truncate_payload(payload, capacity):
    '''
    용량에 맞게 데이터를 자르는 함수
    utf-8 문자 중간에서 잘리지 않도록 불완전한 마지막 문자는 버림
    :param payload: 데이터 bytes
    :param capacity: 최대 바이트 수
    :return: 잘린 데이터 bytes
    '''
    return payload[:capacity].decode('utf-8', errors='ignore').encode('utf-8')


'''
QRCode 클래스
데이터를 QRCode로 바꾸는 클래스
'''


class QRCode(object):
    def __init__(
        self,
        data: str,
        strict: bool = False
    ):
        self.data = data
        self.strict = strict

        self.__make__()

    def __select_version__(self):
        '''
        버전을 결정하고, 용량을 넘으면 데이터를 잘라 한 번 더 결정하는 함수
        '''
        self.version, fits = util.get_version(len(self.payload))
        if fits:
            return

        largest = constants.VERSION_TABLE[-1]
        if self.strict:
            raise PayloadTooLargeError(
                f'데이터 길이 {len(self.payload)} 바이트가 최대 용량 {largest.capacity} 바이트를 초과합니다.',
                length=len(self.payload), capacity=largest.capacity)

        original_length = len(self.payload)
        self.payload = truncate_payload(self.payload, largest.capacity)
        self.dropped = original_length - len(self.payload)
        logger.warning('데이터 길이 %d 바이트가 최대 용량 %d 바이트를 초과하여 %d 바이트를 잘라냅니다.',
                       original_length, largest.capacity, self.dropped)

        # 잘린 데이터로 한 번만 다시 시도
        self.version = util.get_version(len(self.payload))[0]

    def __make__(self):
        # 데이터 utf-8 인코딩, 짝 없는 서로게이트는 '?'로 대체
        self.payload = self.data.encode('utf-8', errors='replace')
        self.dropped = 0

        self.__select_version__()
        logger.debug('데이터 %d 바이트, 버전 %d 선택', len(self.payload), self.version.version)

        # 비트열 생성
        self.bits = util.make_bitstream(self.payload, self.version)

        # 버전 정보로 qr코드에 들어가는 비트 개수 산출
        self.module_count = self.version.size
        self.matrix = QRMatrix(self.version)
        # 최종 qr코드 데이터 확정
        self.qr_data = self.matrix.build(self.bits)

    @property
    def truncated(self):
        return self.dropped > 0

    def result(self):
        return EncodeResult(
            matrix=self.qr_data,
            version=self.version.version,
            payload=self.payload,
            truncated=self.truncated,
            dropped=self.dropped,
        )

    def make_image(self, scale=4, border=4, fill_color='black', back_color='white'):
        '''
        qr코드를 이미지로 만드는 함수
        :param scale: 모듈 한 칸의 픽셀 크기
        :param border: 여백(quiet zone) 모듈 수
        :param fill_color: 검정 모듈 색
        :param back_color: 배경 색
        :return: PIL Image
        '''
        width = (self.module_count + border * 2) * scale
        image = Image.new('RGB', (width, width), back_color)
        draw = ImageDraw.Draw(image)

        for i in range(self.module_count):
            for j in range(self.module_count):
                if not self.qr_data[i][j]:
                    continue
                x = (j + border) * scale
                y = (i + border) * scale
                draw.rectangle([x, y, x + scale - 1, y + scale - 1], fill=fill_color)
        return image

    def save_image(self, dir, **kwargs):
        self.make_image(**kwargs).save(dir)


def encode(text, strict=False):
    '''
    문자열을 qr코드로 인코딩하는 함수
    :param text: 입력 문자열
    :param strict: True면 용량 초과시 잘라내지 않고 PayloadTooLargeError 발생
    :return: EncodeResult
    '''
    return QRCode(text, strict=strict).result()


def make(text):
    '''
    문자열을 qr코드 2darray로 바꾸는 함수
    :param text: 입력 문자열
    :return: True가 검정인 2darray
    '''
    return QRCode(text).qr_data
