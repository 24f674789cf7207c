#
# (c) Copyright 2022 by Coinkite Inc. This file is covered by license found in COPYING-CC.
#
import pytest

from urreg import CardanoUtxo, CardanoCertKey, CryptoKeypath

REQUEST_ID_TEXT = '9b1deb4d-3b7d-4bad-9bdd-2b0d7b3dcb6d'
REQUEST_ID = bytes.fromhex('9b1deb4d3b7d4bad9bdd2b0d7b3dcb6d')

XFP = '73c5da0a'

TX_HASH = '4e3a6e7fdcb0d0efa17bf79c13aed2b4cb9baf37fb1aa2e39553d5bd720c5c99'
KEY_HASH = 'e557890352095f1cf6fd2b7d1a28e3c3cb029f48cf34ff890a28d176'
ADDRESS = 'addr1qy8ac7qqy0vtulyl7wntmsxc6wex80gvcyjy33qffrhm7sh927ysx5sftuw0dlft05dz3c7revpf7jx0xnlcjz3g69mq4afdhv'

@pytest.fixture
def request_id():
    return REQUEST_ID

@pytest.fixture
def utxo_data():
    # friendly form, as wallet software would have it
    return dict(transaction_hash=TX_HASH, index=3, amount=10_000_000, xfp=XFP,
                    hd_path="m/1852'/1815'/0'/0/0", address=ADDRESS)

@pytest.fixture
def utxo(utxo_data):
    return CardanoUtxo.construct(**utxo_data)

@pytest.fixture
def cert_key_data():
    return dict(key_hash=KEY_HASH, xfp=XFP, key_path="m/1852'/1815'/0'/2/0")

@pytest.fixture
def cert_key(cert_key_data):
    return CardanoCertKey.construct(**cert_key_data)

@pytest.fixture
def keypath():
    return CryptoKeypath.construct("m/44'/148'/0'", XFP)

# EOF
