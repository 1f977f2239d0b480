import pytest

from pfstruct.fourcc import fourcc, fourcc_to_bytes, fourcc_to_str


def test_fourcc():
    assert fourcc(b'MODL') == 0x4c444f4d
    assert fourcc('MODL') == 0x4c444f4d
    assert fourcc(0x4c444f4d) == 0x4c444f4d

    assert fourcc_to_bytes(0x41424344) == b'DCBA'
    assert fourcc_to_str(b'ABCD') == 'ABCD'
    assert fourcc_to_str(0x01424344) == 'DCB\\x01'


def test_fourcc_invalid():
    with pytest.raises(ValueError):
        fourcc(b'MOD')

    with pytest.raises(ValueError):
        fourcc(1 << 32)

    with pytest.raises(TypeError):
        fourcc(1.0)
