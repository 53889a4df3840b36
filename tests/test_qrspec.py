import pytest

from slipqr import qrspec
from slipqr.qrspec import ECLevel, EccSpec, Mode

ALL_VERSIONS = range(1, qrspec.VERSION_MAX + 1)


def test_width_pinned_by_table():
    assert qrspec.width(1) == 21
    assert qrspec.width(40) == qrspec.WIDTH_MAX


def test_width_grows_by_four_modules():
    for version in range(2, qrspec.VERSION_MAX + 1):
        assert qrspec.width(version) - qrspec.width(version - 1) == 4


def test_version_zero_is_empty():
    assert qrspec.width(0) == 0
    assert qrspec.data_length(0, ECLevel.L) == 0


@pytest.mark.parametrize("version", [-1, 41])
def test_version_out_of_range(version):
    with pytest.raises(ValueError):
        qrspec.width(version)
    with pytest.raises(ValueError):
        qrspec.data_length(version, ECLevel.L)


def test_invalid_level():
    with pytest.raises(ValueError):
        qrspec.ecc_length(1, 4)


def test_higher_level_means_less_data():
    for version in ALL_VERSIONS:
        lengths = [qrspec.data_length(version, level) for level in ECLevel]
        assert lengths == sorted(lengths, reverse=True)
        eccs = [qrspec.ecc_length(version, level) for level in ECLevel]
        assert eccs == sorted(eccs)


def test_data_plus_ecc_constant_across_levels():
    for version in ALL_VERSIONS:
        totals = {qrspec.data_length(version, lv) + qrspec.ecc_length(version, lv) for lv in ECLevel}
        assert len(totals) == 1


def test_minimum_version_fits_and_is_minimal():
    for level in ECLevel:
        for size in (1, 10, 100, 500, 1000, 2000):
            version = qrspec.minimum_version(size, level)
            if qrspec.data_length(qrspec.VERSION_MAX, level) >= size:
                assert qrspec.data_length(version, level) >= size
                if version > 1:
                    assert qrspec.data_length(version - 1, level) < size


def test_minimum_version_caps_at_max():
    assert qrspec.minimum_version(10**6, ECLevel.H) == qrspec.VERSION_MAX


def test_is_splittable_mode():
    assert [qrspec.is_splittable_mode(m) for m in Mode] == [
        False, True, True, True, True, False, False, False, False,
    ]


def test_length_indicator_values():
    assert qrspec.length_indicator(Mode.NUM, 1) == 10
    assert qrspec.length_indicator(Mode.BYTE, 40) == 16
    assert qrspec.length_indicator(Mode.ECI, 10) == 0


def test_length_indicator_non_decreasing():
    for mode in (Mode.NUM, Mode.AN, Mode.BYTE, Mode.KANJI):
        values = [qrspec.length_indicator(mode, v) for v in ALL_VERSIONS]
        assert values == sorted(values)
        assert qrspec.length_indicator(mode, 9) <= qrspec.length_indicator(mode, 10)


def test_maximum_words_matches_indicator():
    for version in ALL_VERSIONS:
        for mode in (Mode.NUM, Mode.AN, Mode.BYTE):
            bits = qrspec.length_indicator(mode, version)
            assert qrspec.maximum_words(mode, version) == (1 << bits) - 1
        kanji_bits = qrspec.length_indicator(Mode.KANJI, version)
        assert qrspec.maximum_words(Mode.KANJI, version) == ((1 << kanji_bits) - 1) * 2
    assert qrspec.maximum_words(Mode.STRUCTURE, 5) == 0


def test_ecc_spec_totals_match_capacity():
    for version in ALL_VERSIONS:
        for level in ECLevel:
            spec = qrspec.ecc_spec(version, level)
            assert spec.data_length == qrspec.data_length(version, level)
            assert spec.ecc_length == qrspec.ecc_length(version, level)
            if spec.blocks2:
                assert spec.data_codes2 == spec.data_codes1 + 1
            else:
                assert spec.data_codes2 == 0


def test_ecc_spec_single_block_version_one():
    spec = qrspec.ecc_spec(1, ECLevel.L)
    assert spec == EccSpec(1, qrspec.data_length(1, ECLevel.L), qrspec.ecc_length(1, ECLevel.L))
    assert spec.block_num == 1


def test_ecc_spec_rejects_version_zero():
    with pytest.raises(ValueError):
        qrspec.ecc_spec(0, ECLevel.L)


def test_version_pattern():
    assert qrspec.version_pattern(7) == 0x07C94
    assert qrspec.version_pattern(40) == 0x28C69
    assert qrspec.version_pattern(6) == 0
    assert qrspec.version_pattern(41) == 0
    for version in range(7, 41):
        assert qrspec.version_pattern(version) >> 12 == version


def test_format_info():
    assert qrspec.format_info(0, ECLevel.L) == 0x77C4
    assert qrspec.format_info(7, ECLevel.H) == 0x083B
    assert qrspec.format_info(8, ECLevel.L) == 0
    assert qrspec.format_info(-1, ECLevel.M) == 0


@pytest.mark.parametrize("version", [0, 41])
def test_new_frame_rejects_bad_version(version):
    with pytest.raises(ValueError):
        qrspec.new_frame(version)


def test_new_frame_size_and_fixed_cells():
    for version in (1, 2, 7, 40):
        frame = qrspec.new_frame(version)
        size = qrspec.width(version)
        assert len(frame) == size * size
        assert frame[0] == 0xC1
        assert frame[size - 1] == 0xC1
        assert frame[(size - 1) * size] == 0xC1
        assert frame[(size - 8) * size + 8] == 0x81
        assert frame[8 * size] == 0x84


def test_new_frame_timing_patterns_alternate_and_mirror():
    version = 3
    frame = qrspec.new_frame(version)
    size = qrspec.width(version)
    row = [frame[6 * size + x] for x in range(8, size - 8)]
    col = [frame[y * size + 6] for y in range(8, size - 8)]
    assert row == col
    for a, b in zip(row, row[1:]):
        assert a & 1 != b & 1


def test_version_one_has_no_alignment_pattern():
    assert 0xA1 not in qrspec.new_frame(1)


def test_version_two_single_alignment_marker():
    frame = qrspec.new_frame(2)
    size = qrspec.width(2)
    assert frame.count(0xA1) == 17
    assert frame[18 * size + 18] == 0xA1
    assert frame[17 * size + 17] == 0xA0


def test_version_info_blocks_are_transposed():
    for version in (7, 20, 40):
        frame = qrspec.new_frame(version)
        size = qrspec.width(version)
        for x in range(6):
            for y in range(3):
                bottom = frame[(size - 11 + y) * size + x]
                right = frame[x * size + size - 11 + y]
                assert bottom == right
                assert bottom & 0xFE == 0x88


def test_free_cells_cover_data_and_remainder():
    for version in (1, 5, 7, 25, 40):
        frame = qrspec.new_frame(version)
        words = qrspec.data_length(version, ECLevel.L) + qrspec.ecc_length(version, ECLevel.L)
        assert frame.count(0) == words * 8 + qrspec.remainder(version)