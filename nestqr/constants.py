from dataclasses import dataclass

'''
QR코드 생성에 쓰이는 고정 상수
오류 정정 레벨 L, 바이트 모드, 마스크 000 한 가지 조합만 지원
'''


@dataclass(frozen=True)
class Version:
    '''
    버전별 용량 정보
    capacity: 헤더를 제외한 최대 데이터 바이트 수
    ec_codewords: 블록당 오류 정정 코드워드 수
    blocks: 오류 정정 블록 수
    remainder_bits: 코드워드 뒤에 붙는 잔여 비트 수
    '''
    version: int
    capacity: int
    ec_codewords: int
    blocks: int
    remainder_bits: int

    @property
    def size(self):
        return self.version * 4 + 17

    @property
    def data_codewords(self):
        # 모드(4) + 길이(8) + 종단자(4) = 2 바이트
        return self.capacity + HEADER_CODEWORDS

    @property
    def total_ec_codewords(self):
        return self.ec_codewords * self.blocks

    @property
    def total_codewords(self):
        return self.data_codewords + self.total_ec_codewords

    @property
    def total_bits(self):
        return self.total_codewords * 8 + self.remainder_bits


HEADER_CODEWORDS = 2

# 바이트 모드 지시자와 길이 필드 비트 수
MODE_BITS = '0100'
LENGTH_BITS = 8
MAX_PAYLOAD_LENGTH = (1 << LENGTH_BITS) - 1

# 패딩 바이트 (11101100, 00010001)
PAD_BYTES = (0xEC, 0x11)

# 오류 정정 레벨 L 기준 버전 테이블 (용량 오름차순)
VERSION_TABLE = (
    Version(1, 17, 7, 1, 0),
    Version(2, 32, 10, 1, 7),
    Version(3, 53, 15, 1, 7),
    Version(4, 78, 20, 1, 7),
    Version(5, 106, 26, 1, 7),
    Version(6, 134, 18, 2, 7),
    Version(7, 154, 20, 2, 0),
)

# 버전별 정렬 패턴 중심 좌표
ALIGN_PATTERN_POSITION = (
    (),
    (6, 18),
    (6, 22),
    (6, 26),
    (6, 30),
    (6, 34),
    (6, 22, 38),
)

# 분리자를 제외한 7x7 파인더 패턴
FINDER_PATTERN = (
    (1, 1, 1, 1, 1, 1, 1),
    (1, 0, 0, 0, 0, 0, 1),
    (1, 0, 1, 1, 1, 0, 1),
    (1, 0, 1, 1, 1, 0, 1),
    (1, 0, 1, 1, 1, 0, 1),
    (1, 0, 0, 0, 0, 0, 1),
    (1, 1, 1, 1, 1, 1, 1),
)

# 포맷 정보: 레벨 L(01) + 마스크 000, BCH 및 마스크 적용 완료된 값
FORMAT_BITS = (1, 1, 1, 0, 1, 1, 1, 1, 1, 0, 0, 0, 1, 0, 0)

# 버전 정보 (버전 7 이상): 6비트 버전 + 12비트 BCH
VERSION_INFO_BITS = {
    7: 0x07C94,
}

# 마스크 000
MASK_BIT = '000'
MASK_FUNCTION = {
    '000': lambda i, j: (i + j) % 2 == 0,
}
