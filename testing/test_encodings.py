#
# (c) Copyright 2022 by Coinkite Inc. This file is covered by license found in COPYING-CC.
#
# Test conversions from utils.py
# 
import pytest

from urreg.utils import path2str, str2path, uuid_to_bytes, bytes_to_uuid
from urreg.utils import force_bytes, xfp_to_int, xfp_to_str
from urreg.constants import HARDENED

@pytest.mark.parametrize('case',
    [ 'm', 'm/1/2/3', 'm/1h/2h/3/4' ]
)
def test_paths(case):
    assert path2str(str2path(case)) == case
    with pytest.raises(ValueError) as err:
        str2path("m/84h/0h/0h/2147483648h")
    assert err.value.args[0] == 'Hardened path component out of range: 2147483648h'
    with pytest.raises(ValueError) as err:
        str2path("m/84h/h/0h")
    assert err.value.args[0] == 'Malformed bip32 path component: h'
    with pytest.raises(ValueError) as err:
        str2path("m/84h/0h/2147483648")
    assert err.value.args[0] == 'Non-hardened path component out of range: 2147483648'
    with pytest.raises(ValueError) as err:
        str2path("m/84h/0h/-1")
    assert err.value.args[0] == 'Non-hardened path component out of range: -1'

def test_path_notations():
    want = [1852 | HARDENED, 1815 | HARDENED, 0 | HARDENED, 0, 5]
    assert str2path("m/1852'/1815'/0'/0/5") == want
    assert str2path("1852h/1815p/0H/0/5/") == want

def test_uuid():
    b = uuid_to_bytes('9b1deb4d-3b7d-4bad-9bdd-2b0d7b3dcb6d')
    assert b == bytes.fromhex('9b1deb4d3b7d4bad9bdd2b0d7b3dcb6d')
    assert bytes_to_uuid(b) == '9b1deb4d-3b7d-4bad-9bdd-2b0d7b3dcb6d'

    with pytest.raises(ValueError) as err:
        uuid_to_bytes('not-a-uuid')
    assert err.value.args[0] == 'Malformed UUID: not-a-uuid'

def test_force_bytes():
    assert force_bytes('deadbeef') == b'\xde\xad\xbe\xef'
    assert force_bytes('0xDEADBEEF') == b'\xde\xad\xbe\xef'
    assert force_bytes(b'\x01\x02') == b'\x01\x02'
    assert force_bytes(bytearray(2)) == b'\0\0'
    with pytest.raises(ValueError):
        force_bytes('xyz')
    # an int is not a length
    with pytest.raises(TypeError):
        force_bytes(4)
    with pytest.raises(TypeError):
        force_bytes(None)

def test_xfp():
    assert xfp_to_int('73c5da0a') == 0x73c5da0a
    assert xfp_to_int(b'\x73\xc5\xda\x0a') == 0x73c5da0a
    assert xfp_to_int(1234) == 1234
    assert xfp_to_str(0x73c5da0a) == '73c5da0a'
    with pytest.raises(ValueError):
        xfp_to_int('73c5da')

# EOF
