import logging

import error_correction.reed_solomon as reed_solomon
import nestqr.constants as constants
from nestqr.errors import PayloadTooLargeError

logger = logging.getLogger(__name__)


def get_version(data_length):
    '''
    입력된 데이터의 길이로 qr코드 버전을 결정하는 함수
    모든 버전에 맞지 않으면 가장 큰 버전을 돌려주고 fits를 False로 표시
    :param data_length: 데이터 바이트 수
    :return: (버전 정보, 잘림 없이 들어가는지 여부)
    '''
    for version in constants.VERSION_TABLE:
        # 데이터를 표현 가능한 최소 버전이라면 리턴
        if data_length <= version.capacity:
            return version, True
    return constants.VERSION_TABLE[-1], False


def add_terminator_and_pad(encoded_data, total_bits):
    '''
    인코드 데이터에 종단자/패딩 비트 추가하는 함수
    :param encoded_data: 인코드 데이터 비트 문자열
    :param total_bits: 데이터 코드워드 총 비트 수
    :return: 종단자/패딩 비트가 추가된 인코드 데이터
    '''

    # 남은 비트 수가 4개 이하면 남은 수 만큼 0 추가
    for _ in range(min(4, total_bits - len(encoded_data))):
        encoded_data += '0'

    # 8 비트 단위로 끊을 수 있도록 0 비트 추가
    while len(encoded_data) % 8 != 0:
        encoded_data += '0'

    # 두 패딩 바이트를 번갈아 가며 총 비트 수에 맞게 추가
    padding_patterns = [format(b, '08b') for b in constants.PAD_BYTES]
    bytes_to_fill = (total_bits - len(encoded_data)) // 8
    for i in range(bytes_to_fill):
        encoded_data += padding_patterns[i % 2]
    return encoded_data


def encode_data(payload, version):
    '''
    바이트 모드로 데이터 코드워드를 만드는 함수
    :param payload: 데이터 bytes
    :param version: 버전 정보
    :return: 데이터 코드워드 리스트
    '''
    data_length = len(payload)
    if data_length > constants.MAX_PAYLOAD_LENGTH or data_length > version.capacity:
        raise PayloadTooLargeError(
            f'데이터 길이 {data_length} 바이트가 버전 {version.version}의 용량 {version.capacity} 바이트를 초과합니다.',
            length=data_length, capacity=version.capacity)

    # 모드 지시자 + 8비트 길이
    encoded_data = constants.MODE_BITS + format(data_length, f'0{constants.LENGTH_BITS}b')
    for byte in payload:
        encoded_data += format(byte, '08b')

    encoded_data = add_terminator_and_pad(encoded_data, version.data_codewords * 8)
    return [int(encoded_data[i:i + 8], 2) for i in range(0, len(encoded_data), 8)]


def add_error_codewords(data_codewords, version):
    '''
    Reed-Solomon 알고리즘으로 에러 정정 코드워드를 추가하고 블록을 섞는 함수
    :param data_codewords: 데이터 코드워드 리스트
    :param version: 버전 정보
    :return: 데이터 + 에러 정정 코드워드 리스트
    '''
    block_size = len(data_codewords) // version.blocks

    data_code = []  # 블록별 데이터 코드워드
    error_code = []  # 블록별 에러 정정 코드워드
    for idx in range(version.blocks):
        target_data = data_codewords[idx * block_size:(idx + 1) * block_size]
        data_code.append(target_data)
        error_code.append(reed_solomon.rs_encode(target_data, version.ec_codewords))

    # 블록을 순회하며 앞 코드워드부터 순서대로 추가
    data_block = []
    for i in range(block_size):
        for d in data_code:
            data_block.append(d[i])
    for i in range(version.ec_codewords):
        for e in error_code:
            data_block.append(e[i])

    logger.debug('버전 %d: 데이터 코드워드 %d개, 에러 정정 코드워드 %d개',
                 version.version, len(data_codewords), version.total_ec_codewords)
    return data_block


def codewords_to_bits(codewords, remainder_bits=0):
    '''
    코드워드를 MSB 우선 비트열로 바꾸는 함수
    :param codewords: 코드워드 리스트
    :param remainder_bits: 뒤에 붙일 0 비트 수
    :return: 0/1 리스트
    '''
    bits = []
    for codeword in codewords:
        for i in range(7, -1, -1):
            bits.append((codeword >> i) & 1)
    bits.extend([0] * remainder_bits)
    return bits


def make_bitstream(payload, version):
    '''
    데이터를 최종 비트열로 만드는 함수
    :param payload: 데이터 bytes
    :param version: 버전 정보
    :return: 0/1 리스트 (길이는 항상 version.total_bits)
    '''
    data_codewords = encode_data(payload, version)
    codewords = add_error_codewords(data_codewords, version)
    return codewords_to_bits(codewords, version.remainder_bits)
