import pytest

from pfstruct.pf.fcc import FourCC, fourcc, to_string


def test_fourcc():
    assert fourcc(b'AMAT') == 0x54414d41
    assert fourcc('AMAT') == 0x54414d41
    assert fourcc(0x54414d41) == 0x54414d41
    # shorter codes are padded with NULs
    assert fourcc(b'PF') == 0x4650

    with pytest.raises(ValueError):
        fourcc(b'TOOLONG')

    with pytest.raises(ValueError):
        fourcc(0x100000000)

    with pytest.raises(ValueError):
        fourcc(-1)


def test_to_string():
    assert to_string(0x54414d41) == 'AMAT'
    assert to_string(0x4650) == 'PF'


def test_fourcc_enum():
    assert FourCC.AMAT == fourcc(b'AMAT')
    assert FourCC(fourcc(b'GRMT')) is FourCC.GRMT
    assert str(FourCC.MODL) == 'MODL'
