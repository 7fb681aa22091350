'''
QR코드 생성 예외 계층
모든 예외는 QRError를 상속
'''


class QRError(Exception):
    '''QR코드 생성 관련 기본 예외'''
    pass


class PayloadTooLargeError(QRError):
    '''데이터가 지원하는 최대 버전 용량을 초과할 때'''

    def __init__(self, message, length=None, capacity=None):
        super().__init__(message)
        self.length = length
        self.capacity = capacity


class QRMatrixError(QRError):
    '''모듈 배치가 버전 테이블과 맞지 않을 때'''
    pass
