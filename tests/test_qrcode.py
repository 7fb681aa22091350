'''
QRCode 클래스와 encode/make 함수 테스트
'''

import logging

import pytest
from PIL import Image

import nestqr.constants as constants
from nestqr.errors import PayloadTooLargeError, QRError
from nestqr.qrcode import EncodeResult, QRCode, encode, make, truncate_payload

LARGEST = constants.VERSION_TABLE[-1]


def assert_fully_resolved(matrix, size):
    assert len(matrix) == size
    for row in matrix:
        assert len(row) == size
        assert all(isinstance(module, bool) for module in row)


class TestEncode:

    def test_deterministic(self):
        first = make('STNEST-abc123')
        second = make('STNEST-abc123')
        assert first == second

    def test_different_payloads_differ(self):
        assert make('STNEST-abc123') != make('STNEST-abc124')

    def test_empty_string(self):
        result = encode('')
        assert result.version == 1
        assert result.size == 21
        assert not result.truncated
        assert_fully_resolved(result.matrix, 21)

    @pytest.mark.parametrize('version', constants.VERSION_TABLE)
    def test_size_matches_version(self, version):
        result = encode('a' * version.capacity)
        assert result.version == version.version
        assert result.size == 4 * version.version + 17
        assert result.size % 2 == 1
        assert_fully_resolved(result.matrix, result.size)

    @pytest.mark.parametrize('version', constants.VERSION_TABLE)
    def test_finder_pattern_before_mask(self, version):
        qr = QRCode('b' * version.capacity)
        for r in range(7):
            for c in range(7):
                assert qr.matrix.modules[r][c] == constants.FINDER_PATTERN[r][c]

    def test_utf8_payload(self):
        result = encode('예약 확인 STNEST')
        assert result.payload == '예약 확인 STNEST'.encode('utf-8')
        assert result.version == 2
        assert not result.truncated

    def test_lone_surrogate_is_replaced(self):
        result = encode('abc\ud800')
        assert result.payload == b'abc?'
        assert result.version == 1
        assert_fully_resolved(result.matrix, 21)
        assert result.matrix == make('abc?')

    def test_result_type(self):
        result = encode('STNEST-abc123')
        assert isinstance(result, EncodeResult)
        assert result.matrix == make('STNEST-abc123')
        assert result.dropped == 0


class TestTruncation:

    def test_long_payload_is_truncated_once(self):
        text = 'A' * 300
        result = encode(text)
        assert result.truncated
        assert result.version == LARGEST.version
        assert result.size == LARGEST.size
        assert result.payload == b'A' * LARGEST.capacity
        assert result.dropped == 300 - LARGEST.capacity
        assert_fully_resolved(result.matrix, LARGEST.size)

    def test_truncation_is_deterministic(self):
        text = ''.join(chr(ord('a') + i % 26) for i in range(300))
        assert encode(text) == encode(text)

    def test_one_byte_over_capacity(self):
        text = ''.join(chr(ord('a') + i % 26) for i in range(LARGEST.capacity + 1))
        over = encode(text)
        exact = encode(text[:-1])
        assert over.truncated
        assert not exact.truncated
        assert over.dropped == 1
        assert over.matrix == exact.matrix

    def test_truncation_keeps_whole_characters(self):
        text = '가' * 60  # 180 바이트
        result = encode(text)
        assert result.truncated
        assert result.payload == ('가' * 51).encode('utf-8')
        assert result.dropped == 180 - 153

    def test_truncate_payload(self):
        assert truncate_payload(b'abcdef', 4) == b'abcd'
        assert truncate_payload('가나'.encode('utf-8'), 4) == '가'.encode('utf-8')

    def test_truncation_happens_exactly_once(self, caplog):
        with caplog.at_level(logging.WARNING, logger='nestqr.qrcode'):
            first = encode('A' * 300)
        warnings = [record for record in caplog.records
                    if record.name == 'nestqr.qrcode' and record.levelno == logging.WARNING]
        assert len(warnings) == 1
        assert first.truncated

        caplog.clear()
        with caplog.at_level(logging.WARNING, logger='nestqr.qrcode'):
            second = encode('A' * 300)
        assert second == first
        assert len([record for record in caplog.records if record.name == 'nestqr.qrcode']) == 1

    def test_fitting_payload_logs_no_warning(self, caplog):
        with caplog.at_level(logging.WARNING, logger='nestqr.qrcode'):
            encode('A' * LARGEST.capacity)
        assert not [record for record in caplog.records if record.name == 'nestqr.qrcode']

    def test_strict_mode_raises(self):
        with pytest.raises(PayloadTooLargeError) as excinfo:
            encode('D' * 200, strict=True)
        assert excinfo.value.length == 200
        assert excinfo.value.capacity == LARGEST.capacity
        assert isinstance(excinfo.value, QRError)

    def test_strict_mode_accepts_fitting_payload(self):
        result = encode('D' * LARGEST.capacity, strict=True)
        assert not result.truncated


class TestImage:

    def test_image_size(self):
        qr = QRCode('STNEST-abc123')
        image = qr.make_image(scale=2, border=1)
        assert image.size == ((21 + 2) * 2, (21 + 2) * 2)

    def test_image_pixels_follow_matrix(self):
        qr = QRCode('STNEST-abc123')
        scale, border = 3, 2
        image = qr.make_image(scale=scale, border=border, fill_color='black', back_color='white')
        pixels = image.load()
        assert pixels[0, 0] == (255, 255, 255)
        for i in range(qr.module_count):
            for j in range(qr.module_count):
                x = (j + border) * scale + 1
                y = (i + border) * scale + 1
                expected = (0, 0, 0) if qr.qr_data[i][j] else (255, 255, 255)
                assert pixels[x, y] == expected

    def test_custom_colors(self):
        qr = QRCode('STNEST-abc123')
        image = qr.make_image(scale=1, border=0, fill_color=(26, 35, 50), back_color=(255, 255, 255))
        # (0, 1)은 마스크 후에도 검정
        assert image.getpixel((1, 0)) == (26, 35, 50)

    def test_save_image(self, tmp_path):
        path = tmp_path / 'booking.png'
        qr = QRCode('STNEST-abc123')
        qr.save_image(str(path), scale=4, border=4)
        with Image.open(path) as saved:
            assert saved.size == ((21 + 8) * 4, (21 + 8) * 4)
