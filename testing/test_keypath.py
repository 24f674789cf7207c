#
# (c) Copyright 2022 by Coinkite Inc. This file is covered by license found in COPYING-CC.
#
import pytest
from cbor2 import CBORTag

from urreg import CryptoKeypath
from urreg.constants import HARDENED
from urreg.exceptions import MalformedField, MissingRequiredField

def test_construct():
    kp = CryptoKeypath.construct("m/1852'/1815'/0'", xfp='73c5da0a')
    assert kp.components == (1852 | HARDENED, 1815 | HARDENED, HARDENED)
    assert kp.source_fingerprint == 0x73c5da0a
    assert kp.depth is None
    assert kp.path == 'm/1852h/1815h/0h'
    assert kp.xfp == '73c5da0a'

    assert kp.to_data_item() == {
        1: [1852, True, 1815, True, 0, True],
        2: 0x73c5da0a,
    }

def test_no_fingerprint():
    kp = CryptoKeypath.construct('m/0/1', depth=5)
    assert kp.xfp is None
    assert kp.to_data_item() == { 1: [0, False, 1, False], 3: 5 }
    assert CryptoKeypath.from_data_item(kp.to_data_item()) == kp

def test_roundtrip(keypath):
    got = CryptoKeypath.from_cbor(keypath.to_cbor())
    assert got == keypath
    assert hash(got) == hash(keypath)

    # tagged with own tag is fine too
    assert CryptoKeypath.from_data_item(keypath.to_tagged_item()) == keypath

@pytest.mark.parametrize('item, field', [
    ({ 2: 1 }, 'components'),
])
def test_missing(item, field):
    with pytest.raises(MissingRequiredField) as err:
        CryptoKeypath.from_data_item(item)
    assert err.value.field == field

@pytest.mark.parametrize('item', [
    { 1: [44, True, 0] },                   # odd length
    { 1: [44, 1] },                         # hardened flag not bool
    { 1: [[0, 10], False] },                # ranges not supported
    { 1: [], 2: 1 << 32 },                  # fingerprint too big
    { 1: [], 3: 256 },                      # depth too big
    { 1: [HARDENED, False] },               # index out of range
    { 1: 'm/44h' },
    [ 1, 2 ],
    CBORTag(305, { 1: [] }),
])
def test_malformed(item):
    with pytest.raises(MalformedField):
        CryptoKeypath.from_data_item(item)

def test_bad_construct():
    with pytest.raises(MalformedField):
        CryptoKeypath("m/44h")
    with pytest.raises(ValueError):
        CryptoKeypath.construct("m/44x")

# EOF
