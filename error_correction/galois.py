# GF(2^8) 원시 다항식 x^8 + x^4 + x^3 + x^2 + 1
PRIMITIVE_POLY = 0x11d


# 지수/로그 테이블 생성
def init_galois_field():
    exp = [0] * 512  # 지수 테이블 (곱셈시 나머지 연산을 피하기 위해 두 배 길이)
    log = [0] * 256  # 로그 테이블

    x = 1
    for i in range(255):
        exp[i] = x
        log[x] = i
        x <<= 1
        if x & 0x100:
            x ^= PRIMITIVE_POLY
    for i in range(255, 512):
        exp[i] = exp[i - 255]

    return tuple(exp), tuple(log)


# 모듈 로드시 한 번만 계산, 이후 읽기 전용
EXP, LOG = init_galois_field()


# 유한체의 곱셈
def gf_mult(x, y):
    if x == 0 or y == 0:
        return 0
    return EXP[LOG[x] + LOG[y]]


# 유한체의 거듭제곱
def gf_pow(x, power):
    if x == 0:
        return 0 if power > 0 else 1
    return EXP[(LOG[x] * power) % 255]
