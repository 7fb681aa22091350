import argparse
import logging
import sys

from nestqr.errors import PayloadTooLargeError
from nestqr.qrcode import QRCode


def setup_logging(verbose=False):
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )


def print_matrix(matrix):
    for row in matrix:
        print(''.join('##' if dark else '  ' for dark in row))


def main(argv=None):
    parser = argparse.ArgumentParser(description='문자열을 qr코드로 인코딩합니다.')
    parser.add_argument('text', help='인코딩할 문자열')
    parser.add_argument('-o', '--output', help='저장할 이미지 경로 (없으면 터미널에 출력)')
    parser.add_argument('--scale', type=int, default=4, help='모듈 한 칸의 픽셀 크기')
    parser.add_argument('--border', type=int, default=4, help='여백 모듈 수')
    parser.add_argument('--strict', action='store_true', help='용량 초과시 잘라내지 않고 실패')
    parser.add_argument('-v', '--verbose', action='store_true', help='디버그 로그 출력')
    args = parser.parse_args(argv)

    setup_logging(args.verbose)

    try:
        qr = QRCode(args.text, strict=args.strict)
    except PayloadTooLargeError as e:
        logging.error(str(e))
        return 1

    print('버전:', qr.version.version)
    print('크기:', qr.module_count)
    if qr.truncated:
        print('잘린 바이트 수:', qr.dropped)

    if args.output:
        qr.save_image(args.output, scale=args.scale, border=args.border)
        logging.info('이미지 저장: %s', args.output)
    else:
        print_matrix(qr.qr_data)
    return 0


if __name__ == '__main__':
    sys.exit(main())
