from functools import lru_cache

from error_correction.galois import gf_mult, gf_pow


# 다항식 곱셈
def poly_mult(p1, p2):
    res = [0] * (len(p1) + len(p2) - 1)
    for i in range(len(p1)):
        for j in range(len(p2)):
            res[i + j] ^= gf_mult(p1[i], p2[j])
    return res


# 생성 다항식 생성: (x - α^0)(x - α^1)...(x - α^(nsym-1))
@lru_cache(maxsize=None)
def generate_generator_polynomial(nsym):
    g = [1]
    for i in range(nsym):
        g = poly_mult(g, [1, gf_pow(2, i)])
    return tuple(g)


# 다항식 나눗셈, 나머지만 반환
def poly_div(dividend, divisor):
    msg_out = list(dividend)
    for i in range(len(dividend) - (len(divisor) - 1)):
        coef = msg_out[i]
        if coef != 0:
            for j in range(1, len(divisor)):
                msg_out[i + j] ^= gf_mult(divisor[j], coef)
    return msg_out[-(len(divisor) - 1):] if len(divisor) > 1 else []


# 에러 정정 코드워드 생성
def rs_encode(msg_in, nsym):
    gen = generate_generator_polynomial(nsym)
    msg_out = list(msg_in) + [0] * nsym
    return poly_div(msg_out, gen)
