#
# (c) Copyright 2022 by Coinkite Inc. This file is covered by license found in COPYING-CC.
#
# System constants.
#

# CBOR tags from the shared registry (BCR-2020-006)
TAG_UUID = 37
TAG_CRYPTO_KEYPATH = 304

# Cardano
TAG_CARDANO_UTXO = 2201
TAG_CARDANO_SIGN_REQUEST = 2202
TAG_CARDANO_SIGNATURE = 2203
TAG_CARDANO_CERT_KEY = 2204
TAG_CARDANO_CATALYST_VOTING_REGISTRATION_SIGNATURE = 2208

# Bitcoin
TAG_BTC_SIGN_REQUEST = 8101
TAG_BTC_SIGNATURE = 8102

# Stellar
TAG_STELLAR_SIGN_REQUEST = 8201
TAG_STELLAR_SIGNATURE = 8202

# request ids are RFC-4122 UUID values, always in binary form on the wire
REQUEST_ID_SIZE = 16

# fixed field sizes (bytes)
CARDANO_TX_HASH_SIZE = 32           # blake2b-256
CARDANO_KEY_HASH_SIZE = 28          # blake2b-224
BTC_PUBKEY_SIZE = 33                # always compressed

# source fingerprint (xfp) is the first 4 bytes of hash160(master pubkey)
XFP_SIZE = 4

# high bit set in LE32 indicating hardened BIP-32 path component
HARDENED = 0x8000_0000

# EOF
