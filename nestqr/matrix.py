import nestqr.constants as constants
from nestqr.errors import QRMatrixError

# 아직 아무 값도 쓰이지 않은 칸
EMPTY = 2

'''
QRMatrix 클래스
비트열을 고정 패턴과 함께 정사각형 qr코드 2darray로 배치하는 클래스
'''


class QRMatrix(object):
    def __init__(self, version):
        self.version = version
        self.module_count = version.size
        # qr코드를 표현할 2darray
        self.modules = [[EMPTY] * self.module_count for _ in range(self.module_count)]
        # 기능 패턴 칸 여부
        self.function = [[False] * self.module_count for _ in range(self.module_count)]

    def __set_function__(self, row, col, value):
        '''
        기능 패턴 칸에 값을 쓰는 함수, 같은 칸에 두 번 쓰면 오류
        '''
        if self.modules[row][col] != EMPTY:
            raise QRMatrixError(f'({row}, {col}) 모듈에 이미 값이 있습니다.')
        self.modules[row][col] = value
        self.function[row][col] = True

    def __add_finder_pattern__(self, start_x, start_y):
        '''
        분리자를 포함한 파인더 패턴을 추가하는 함수
        :param start_x: 가로 시작 위치
        :param start_y: 세로 시작 위치
        '''
        for i in range(start_y - 1, start_y + 8):
            for j in range(start_x - 1, start_x + 8):
                if not (0 <= i < self.module_count and 0 <= j < self.module_count):
                    continue
                r, c = i - start_y, j - start_x
                # 바깥 분리자는 흰색
                if r in (-1, 7) or c in (-1, 7):
                    self.__set_function__(i, j, 0)
                else:
                    self.__set_function__(i, j, constants.FINDER_PATTERN[r][c])

    def __add_align_pattern__(self):
        '''
        정렬 패턴을 추가하는 함수
        '''
        # 사전 정의된 버전별 정렬 패턴 위치 가져오기
        pos = constants.ALIGN_PATTERN_POSITION[self.version.version - 1]
        for row in pos:
            for col in pos:
                # 파인더 패턴과 겹치는 위치는 건너뜀
                if self.modules[row][col] != EMPTY:
                    continue
                for r in range(-2, 3):
                    for c in range(-2, 3):
                        if r == -2 or r == 2 or c == -2 or c == 2 or (r == 0 and c == 0):
                            self.__set_function__(row + r, col + c, 1)
                        else:
                            self.__set_function__(row + r, col + c, 0)

    def __add_timing_pattern__(self):
        '''
        타이밍 패턴을 추가하는 함수
        '''
        # 세로 타이밍 패턴 추가
        for i in range(8, self.module_count - 8):
            if self.modules[i][6] != EMPTY: continue
            self.__set_function__(i, 6, int(i % 2 == 0))
        # 가로 타이밍 패턴 추가
        for i in range(8, self.module_count - 8):
            if self.modules[6][i] != EMPTY: continue
            self.__set_function__(6, i, int(i % 2 == 0))

    def __add_dark_module__(self):
        self.__set_function__(self.module_count - 8, 8, 1)

    def __add_format_information__(self):
        '''
        고정 포맷 정보를 추가하는 함수
        '''
        format_bit = constants.FORMAT_BITS

        bit_idx = 14
        # 좌측 상단 파인더 패턴 오른쪽 세로줄
        for i in range(0, 9):
            if i == 6: continue
            self.__set_function__(i, 8, format_bit[bit_idx])
            bit_idx -= 1
        # 좌측 상단 파인더 패턴 아래 가로줄
        for i in range(7, -1, -1):
            if i == 6: continue
            self.__set_function__(8, i, format_bit[bit_idx])
            bit_idx -= 1

        bit_idx = 14
        # 우측 상단 파인더 패턴 아래
        for i in range(self.module_count - 1, self.module_count - 9, -1):
            self.__set_function__(8, i, format_bit[bit_idx])
            bit_idx -= 1
        # 좌측 하단 파인더 패턴 오른쪽 (다크 모듈 아래부터)
        for i in range(self.module_count - 7, self.module_count):
            self.__set_function__(i, 8, format_bit[bit_idx])
            bit_idx -= 1

    def __add_version_information__(self):
        '''
        버전 정보를 추가하는 함수 (버전 7 이상)
        '''
        version_bits = constants.VERSION_INFO_BITS.get(self.version.version)
        if version_bits is None:
            return
        # 좌측 하단 파인더 패턴 위와 우측 상단 파인더 패턴 왼쪽에 버전 정보 추가
        bits_idx = 0
        for i in range(0, 6):
            for j in range(self.module_count - 11, self.module_count - 8):
                bit = (version_bits >> bits_idx) & 1
                self.__set_function__(j, i, bit)
                self.__set_function__(i, j, bit)
                bits_idx += 1

    def add_function_patterns(self):
        '''
        데이터 영역을 제외한 모든 고정 패턴을 추가하는 함수
        '''
        # 좌측 상단, 우측 상단, 좌측 하단 파인더 패턴
        self.__add_finder_pattern__(0, 0)
        self.__add_finder_pattern__(self.module_count - 7, 0)
        self.__add_finder_pattern__(0, self.module_count - 7)
        self.__add_align_pattern__()
        self.__add_timing_pattern__()
        self.__add_dark_module__()
        self.__add_format_information__()
        self.__add_version_information__()

    def data_capacity(self):
        '''
        데이터가 들어갈 수 있는 빈 칸 수
        '''
        return sum(row.count(EMPTY) for row in self.modules)

    def add_data(self, bits):
        '''
        빈 칸에 비트를 순서대로 배치하는 함수
        오른쪽 끝에서 두 열씩 왼쪽으로, 위아래 방향을 번갈아 가며 순회
        :param bits: 0/1 리스트
        '''
        if len(bits) > self.data_capacity():
            raise QRMatrixError(
                f'비트 수 {len(bits)}가 데이터 영역 {self.data_capacity()}칸을 초과합니다.')

        bit_idx = 0
        upward = True
        col = self.module_count - 1
        while col >= 1:
            # 세로 타이밍 패턴 열은 건너뜀
            if col == 6:
                col -= 1
            for i in range(self.module_count):
                row = self.module_count - 1 - i if upward else i
                # 오른쪽 열 먼저
                for c in (col, col - 1):
                    if self.modules[row][c] != EMPTY:
                        continue
                    # 비트가 다 떨어지면 흰색
                    if bit_idx < len(bits):
                        self.modules[row][c] = bits[bit_idx]
                        bit_idx += 1
                    else:
                        self.modules[row][c] = 0
            upward = not upward
            col -= 2

    def apply_mask(self):
        '''
        모든 칸에 마스크 000을 적용한 최종 qr코드를 만드는 함수
        기능 패턴 칸도 함께 반전됨
        :return: True가 검정인 2darray
        '''
        mask_func = constants.MASK_FUNCTION[constants.MASK_BIT]
        result = []
        for i in range(self.module_count):
            row = []
            for j in range(self.module_count):
                value = self.modules[i][j]
                if value == EMPTY:
                    raise QRMatrixError(f'({i}, {j}) 모듈이 채워지지 않았습니다.')
                if mask_func(i, j):
                    value ^= 1
                row.append(value == 1)
            result.append(row)
        return result

    def build(self, bits):
        '''
        고정 패턴, 데이터 배치, 마스크 적용을 차례로 수행하는 함수
        :param bits: 0/1 리스트
        :return: True가 검정인 2darray
        '''
        self.add_function_patterns()
        self.add_data(bits)
        return self.apply_mask()
