"""Tests for 2D symbol commands."""

import pytest

from posprinter import (
    Aztec,
    AztecMode,
    AztecOption,
    DataMatrix,
    DataMatrixOption,
    DataMatrixType,
    GS1DataBar2D,
    GS1DataBar2DOption,
    GS1DataBar2DType,
    GS1DataBar2DWidth,
    InputError,
    MaxiCode,
    MaxiCodeMode,
    Pdf417,
    Pdf417CorrectionLevel,
    Pdf417Option,
    Pdf417Type,
    QRCode,
    QRCodeCorrectionLevel,
    QRCodeModel,
    QRCodeOption,
)
from posprinter.codes import (
    DATAMATRIX_RECTANGLE_SIZES,
    DATAMATRIX_SQUARE_SIZES,
    gs1_databar_2d_data,
    gs1_databar_2d_expanded_width,
    pdf417_correction_level,
    pdf417_rows,
    qrcode_data,
    qrcode_model,
    qrcode_size,
    validate_gs1_databar_2d,
)

GS_K = [0x1D, 0x28, 0x6B]


class TestQRCode:
    """Test QR Code commands."""

    def test_model(self):
        assert qrcode_model(QRCodeModel.MODEL1) == bytes(GS_K + [4, 0, 0x31, 0x41, 0x31, 0x00])

    def test_size_clamped(self):
        """Test sizes above 15 are clamped."""
        assert qrcode_size(20) == bytes(GS_K + [3, 0, 0x31, 0x43, 0x0F])
        assert qrcode_size(6) == bytes(GS_K + [3, 0, 0x31, 0x43, 6])

    def test_size_negative(self):
        with pytest.raises(InputError):
            qrcode_size(-1)

    def test_empty_data(self):
        """Test an empty payload still carries the store header."""
        assert list(qrcode_data("")) == [29, 40, 107, 3, 0, 49, 80, 48]

    def test_data_length_counts_utf8_bytes(self):
        assert qrcode_data("é") == bytes(GS_K + [5, 0, 0x31, 0x50, 0x30]) + "é".encode("utf-8")

    def test_full_sequence(self):
        option = QRCodeOption(QRCodeModel.MODEL2, 6, QRCodeCorrectionLevel.M)
        assert QRCode("hi", option).commands() == [
            bytes(GS_K + [4, 0, 0x31, 0x41, 50, 0]),
            bytes(GS_K + [3, 0, 0x31, 0x43, 6]),
            bytes(GS_K + [3, 0, 0x31, 0x45, 49]),
            bytes(GS_K + [5, 0, 0x31, 0x50, 0x30]) + b"hi",
            bytes(GS_K + [3, 0, 0x31, 0x51, 0x30]),
        ]

    def test_option_rejects_zero_size(self):
        with pytest.raises(InputError):
            QRCodeOption(size=0)

    def test_data_too_long(self):
        with pytest.raises(InputError, match="too long"):
            QRCode("1" * 7090)


class TestPdf417:
    """Test PDF417 commands and options."""

    def test_correction_ratio(self):
        level = Pdf417CorrectionLevel.ratio(1)
        assert pdf417_correction_level(level) == bytes(GS_K + [4, 0, 0x30, 0x45, 49, 1])

    def test_correction_level(self):
        level = Pdf417CorrectionLevel.level(3)
        assert pdf417_correction_level(level) == bytes(GS_K + [4, 0, 0x30, 0x45, 48, 51])

    @pytest.mark.parametrize(
        "factory,value", [(Pdf417CorrectionLevel.level, 9), (Pdf417CorrectionLevel.ratio, 0)]
    )
    def test_correction_out_of_range(self, factory, value):
        with pytest.raises(InputError):
            factory(value)

    def test_rows_zero_is_automatic(self):
        assert pdf417_rows(0) == bytes(GS_K + [3, 0, 0x30, 0x42, 0])

    @pytest.mark.parametrize("rows", [1, 2, 91])
    def test_rows_out_of_range(self, rows):
        with pytest.raises(InputError, match="rows"):
            pdf417_rows(rows)

    @pytest.mark.parametrize(
        "kwargs", [{"columns": 31}, {"width": 1}, {"row_height": 9}, {"rows": 2}]
    )
    def test_option_validation(self, kwargs):
        with pytest.raises(InputError):
            Pdf417Option(**kwargs)

    def test_full_sequence(self):
        commands = Pdf417("data", Pdf417Option(code_type=Pdf417Type.TRUNCATED)).commands()
        assert len(commands) == 8
        assert commands[2] == bytes(GS_K + [3, 0, 0x30, 0x43, 2])
        assert commands[3] == bytes(GS_K + [3, 0, 0x30, 0x44, 3])
        assert commands[5] == bytes(GS_K + [3, 0, 0x30, 0x46, 1])
        assert commands[6] == bytes(GS_K + [7, 0, 0x30, 0x50, 0x30]) + b"data"


class TestMaxiCode:
    """Test MaxiCode commands."""

    def test_sequence(self):
        assert MaxiCode("A", MaxiCodeMode.MODE4).commands() == [
            bytes(GS_K + [3, 0, 0x32, 0x41, 52]),
            bytes(GS_K + [4, 0, 0x32, 0x50, 0x30]) + b"A",
            bytes(GS_K + [3, 0, 0x32, 0x51, 0x30]),
        ]


class TestGS1DataBar2D:
    """Test GS1 DataBar (2D) validation and commands."""

    def test_stacked_requires_13_digits(self):
        validate_gs1_databar_2d("1234567890123", GS1DataBar2DType.STACKED)
        with pytest.raises(InputError):
            validate_gs1_databar_2d("123456789012", GS1DataBar2DType.STACKED_OMNIDIRECTIONAL)
        with pytest.raises(InputError):
            validate_gs1_databar_2d("123456789012A", GS1DataBar2DType.STACKED)

    def test_expanded_alphabet(self):
        validate_gs1_databar_2d("0123ABCD !%()", GS1DataBar2DType.EXPANDED_STACKED)
        with pytest.raises(InputError):
            validate_gs1_databar_2d("abc", GS1DataBar2DType.EXPANDED_STACKED)

    def test_expanded_accepts_empty(self):
        validate_gs1_databar_2d("", GS1DataBar2DType.EXPANDED_STACKED)

    def test_expanded_max_length(self):
        validate_gs1_databar_2d("1" * 255, GS1DataBar2DType.EXPANDED_STACKED)
        with pytest.raises(InputError):
            validate_gs1_databar_2d("1" * 256, GS1DataBar2DType.EXPANDED_STACKED)

    def test_expanded_width_is_automatic(self):
        assert gs1_databar_2d_expanded_width() == bytes(GS_K + [4, 0, 0x33, 0x47, 0, 0])

    def test_data_carries_type(self):
        assert gs1_databar_2d_data("12", GS1DataBar2DType.EXPANDED_STACKED) == (
            bytes(GS_K + [6, 0, 0x33, 0x50, 0x30, 76]) + b"12"
        )

    def test_sequence(self):
        option = GS1DataBar2DOption(GS1DataBar2DWidth.L, GS1DataBar2DType.STACKED)
        commands = GS1DataBar2D("1234567890123", option).commands()
        assert commands[0] == bytes(GS_K + [3, 0, 0x33, 0x43, 4])
        assert commands[-1] == bytes(GS_K + [3, 0, 0x33, 0x51, 0x30])

    def test_invalid_payload_rejected_on_creation(self):
        with pytest.raises(InputError):
            GS1DataBar2D("123")


class TestDataMatrix:
    """Test DataMatrix shapes and commands."""

    @pytest.mark.parametrize("side", [0, 10, 26, 144])
    def test_valid_square(self, side):
        assert DataMatrixType.square(side).parameters() == (0, side, side)

    @pytest.mark.parametrize("side", [11, 28, 145])
    def test_invalid_square(self, side):
        with pytest.raises(InputError, match="square"):
            DataMatrixType.square(side)

    @pytest.mark.parametrize("rows,columns", [(8, 0), (12, 36), (16, 48)])
    def test_valid_rectangle(self, rows, columns):
        assert DataMatrixType.rectangle(rows, columns).parameters() == (1, rows, columns)

    @pytest.mark.parametrize("rows,columns", [(8, 26), (10, 10), (16, 18)])
    def test_invalid_rectangle(self, rows, columns):
        with pytest.raises(InputError, match="rectangle"):
            DataMatrixType.rectangle(rows, columns)

    @pytest.mark.parametrize("size", [1, 17])
    def test_size_out_of_range(self, size):
        with pytest.raises(InputError):
            DataMatrixOption(size=size)

    def test_sequence(self):
        option = DataMatrixOption(DataMatrixType.square(10), 4)
        assert DataMatrix("x", option).commands() == [
            bytes(GS_K + [5, 0, 0x36, 0x42, 0, 10, 10]),
            bytes(GS_K + [3, 0, 0x36, 0x43, 4]),
            bytes(GS_K + [4, 0, 0x36, 0x50, 0x30]) + b"x",
            bytes(GS_K + [3, 0, 0x36, 0x51, 0x30]),
        ]


class TestAztec:
    """Test Aztec modes and commands."""

    @pytest.mark.parametrize("layers", [0, 4, 32])
    def test_full_range_layers(self, layers):
        assert AztecMode.full_range(layers).parameters() == (0, layers)

    @pytest.mark.parametrize("layers", [1, 3, 33])
    def test_full_range_invalid_layers(self, layers):
        with pytest.raises(InputError, match="full-range"):
            AztecMode.full_range(layers)

    def test_compact_layers(self):
        assert AztecMode.compact(2).parameters() == (1, 2)
        with pytest.raises(InputError, match="compact"):
            AztecMode.compact(5)

    @pytest.mark.parametrize("kwargs", [{"size": 1}, {"correction_level": 4}, {"correction_level": 96}])
    def test_option_validation(self, kwargs):
        with pytest.raises(InputError):
            AztecOption(**kwargs)

    def test_sequence(self):
        option = AztecOption(AztecMode.compact(2), 5, 50)
        assert Aztec("ab", option).commands() == [
            bytes(GS_K + [4, 0, 0x35, 0x42, 1, 2]),
            bytes(GS_K + [3, 0, 0x35, 0x43, 5]),
            bytes(GS_K + [3, 0, 0x35, 0x45, 50]),
            bytes(GS_K + [5, 0, 0x35, 0x50, 0x30]) + b"ab",
            bytes(GS_K + [3, 0, 0x35, 0x51, 0x30]),
        ]


class TestExhaustiveValidation:
    """Test symbol parameters against their full legal sets."""

    def test_every_square_side(self):
        for side in range(256):
            if side in DATAMATRIX_SQUARE_SIZES:
                assert DataMatrixType.square(side).parameters() == (0, side, side)
            else:
                with pytest.raises(InputError):
                    DataMatrixType.square(side)

    def test_every_rectangle_pair(self):
        accepted = set()
        for rows in range(256):
            for columns in range(256):
                try:
                    DataMatrixType.rectangle(rows, columns)
                except InputError:
                    continue
                accepted.add((rows, columns))
        assert accepted == DATAMATRIX_RECTANGLE_SIZES

    def test_every_aztec_layer_count(self):
        full_range = {0} | set(range(4, 33))
        for layers in range(256):
            if layers in full_range:
                AztecMode.full_range(layers)
            else:
                with pytest.raises(InputError):
                    AztecMode.full_range(layers)
            if layers <= 4:
                AztecMode.compact(layers)
            else:
                with pytest.raises(InputError):
                    AztecMode.compact(layers)


class TestEnumArguments:
    """Test out-of-range selector values raise InputError."""

    def test_qrcode_model(self):
        with pytest.raises(InputError, match="QR code model must be one of"):
            qrcode_model(7)

    def test_gs1_type(self):
        with pytest.raises(InputError, match="GS1 DataBar type must be one of"):
            validate_gs1_databar_2d("1234567890123", 70)
