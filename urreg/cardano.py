#
# (c) Copyright 2022 by Coinkite Inc. This file is covered by license found in COPYING-CC.
#
# cardano.py
#
# Cardano sign requests and signatures, plus the UTXO and cert-key entities
# nested inside a sign request.
#
from .constants import *
from .registry import RegistryItem, RegistryType, MapReader
from .registry import uuid_item, tag_item
from .registry import check_bytes, check_text, check_uint, check_items, check_request_id
from .keypath import CryptoKeypath
from .exceptions import MalformedField
from .utils import force_bytes, uuid_to_bytes

CARDANO_UTXO = RegistryType('cardano-utxo', TAG_CARDANO_UTXO)
CARDANO_SIGN_REQUEST = RegistryType('cardano-sign-request', TAG_CARDANO_SIGN_REQUEST)
CARDANO_SIGNATURE = RegistryType('cardano-signature', TAG_CARDANO_SIGNATURE)
CARDANO_CERT_KEY = RegistryType('cardano-cert-key', TAG_CARDANO_CERT_KEY)
CARDANO_CATALYST_VOTING_REGISTRATION_SIGNATURE = RegistryType(
        'cardano-catalyst-voting-registration-signature',
        TAG_CARDANO_CATALYST_VOTING_REGISTRATION_SIGNATURE)


class CardanoUtxo(RegistryItem):
    #
    # A transaction input being spent, and the key path that can sign for it.
    #
    registry_type = CARDANO_UTXO

    TRANSACTION_HASH = 1
    INDEX = 2
    AMOUNT = 3
    KEY_PATH = 4
    ADDRESS = 5

    __slots__ = ('transaction_hash', 'index', 'amount', 'key_path', 'address')

    def __init__(self, transaction_hash, index, amount, key_path, address):
        name = self.registry_type.name

        if not isinstance(key_path, CryptoKeypath):
            raise MalformedField(name, 'key_path', 'must be CryptoKeypath')

        self._init_fields(
            transaction_hash=check_bytes(name, 'transaction_hash', transaction_hash,
                                                size=CARDANO_TX_HASH_SIZE),
            index=check_uint(name, 'index', index),
            amount=check_text(name, 'amount', amount),
            key_path=key_path,
            address=check_text(name, 'address', address))

    @classmethod
    def construct(cls, transaction_hash, index, amount, xfp, hd_path, address):
        # hex text tx hash, lovelace amount as int or text, path like "m/1852'/1815'/0'/0/0"
        if isinstance(amount, int) and not isinstance(amount, bool):
            amount = str(amount)
        return cls(force_bytes(transaction_hash), index, amount,
                        CryptoKeypath.construct(hd_path, xfp), address)

    def to_data_item(self):
        return {
            self.TRANSACTION_HASH: self.transaction_hash,
            self.INDEX: self.index,
            self.AMOUNT: self.amount,
            self.KEY_PATH: tag_item(self.key_path),
            self.ADDRESS: self.address,
        }

    @classmethod
    def from_data_item(cls, item, strict=False):
        rd = MapReader(cls, item, strict=strict)
        return cls(rd.get(cls.TRANSACTION_HASH, 'transaction_hash'),
                   rd.get(cls.INDEX, 'index'),
                   rd.get(cls.AMOUNT, 'amount'),
                   rd.entity(cls.KEY_PATH, 'key_path', CryptoKeypath),
                   rd.get(cls.ADDRESS, 'address'))


class CardanoCertKey(RegistryItem):
    #
    # Additional signer: key hash and the path to the key.
    #
    registry_type = CARDANO_CERT_KEY

    KEY_HASH = 1
    KEY_PATH = 2

    __slots__ = ('key_hash', 'key_path')

    def __init__(self, key_hash, key_path):
        name = self.registry_type.name

        if not isinstance(key_path, CryptoKeypath):
            raise MalformedField(name, 'key_path', 'must be CryptoKeypath')

        self._init_fields(
            key_hash=check_bytes(name, 'key_hash', key_hash, size=CARDANO_KEY_HASH_SIZE),
            key_path=key_path)

    @classmethod
    def construct(cls, key_hash, xfp, key_path):
        return cls(force_bytes(key_hash), CryptoKeypath.construct(key_path, xfp))

    def to_data_item(self):
        return {
            self.KEY_HASH: self.key_hash,
            self.KEY_PATH: tag_item(self.key_path),
        }

    @classmethod
    def from_data_item(cls, item, strict=False):
        rd = MapReader(cls, item, strict=strict)
        return cls(rd.get(cls.KEY_HASH, 'key_hash'),
                   rd.entity(cls.KEY_PATH, 'key_path', CryptoKeypath))


class CardanoSignRequest(RegistryItem):
    registry_type = CARDANO_SIGN_REQUEST

    REQUEST_ID = 1
    SIGN_DATA = 2
    UTXOS = 3
    EXTRA_SIGNERS = 4
    ORIGIN = 5

    __slots__ = ('request_id', 'sign_data', 'utxos', 'extra_signers', 'origin')

    def __init__(self, sign_data, utxos, extra_signers, request_id=None, origin=None):
        name = self.registry_type.name
        self._init_fields(
            request_id=check_request_id(name, request_id),
            sign_data=check_bytes(name, 'sign_data', sign_data),
            utxos=check_items(name, 'utxos', utxos, CardanoUtxo),
            extra_signers=check_items(name, 'extra_signers', extra_signers, CardanoCertKey),
            origin=check_text(name, 'origin', origin, optional=True))

    @classmethod
    def construct(cls, sign_data, utxos, extra_signers, uuid_string=None, origin=None):
        # utxos and extra_signers are dicts with the keyword args for
        # CardanoUtxo.construct and CardanoCertKey.construct
        return cls(force_bytes(sign_data),
                   [CardanoUtxo.construct(**u) for u in utxos],
                   [CardanoCertKey.construct(**k) for k in extra_signers],
                   request_id=uuid_to_bytes(uuid_string) if uuid_string else None,
                   origin=origin or None)

    def to_data_item(self):
        rv = {}
        if self.request_id is not None:
            rv[self.REQUEST_ID] = uuid_item(self.request_id)

        rv[self.SIGN_DATA] = self.sign_data
        rv[self.UTXOS] = [tag_item(u) for u in self.utxos]
        rv[self.EXTRA_SIGNERS] = [tag_item(k) for k in self.extra_signers]

        if self.origin is not None:
            rv[self.ORIGIN] = self.origin

        return rv

    @classmethod
    def from_data_item(cls, item, strict=False):
        rd = MapReader(cls, item, strict=strict)
        return cls(rd.get(cls.SIGN_DATA, 'sign_data'),
                   rd.entities(cls.UTXOS, 'utxos', CardanoUtxo),
                   rd.entities(cls.EXTRA_SIGNERS, 'extra_signers', CardanoCertKey),
                   request_id=rd.request_id(cls.REQUEST_ID),
                   origin=rd.get(cls.ORIGIN, 'origin', required=False))


class CardanoSignature(RegistryItem):
    #
    # Answer to a CardanoSignRequest: the witness set, CBOR encoded by the device.
    #
    registry_type = CARDANO_SIGNATURE

    REQUEST_ID = 1
    WITNESS_SET = 2

    __slots__ = ('request_id', 'witness_set')

    def __init__(self, witness_set, request_id=None):
        name = self.registry_type.name
        self._init_fields(
            request_id=check_request_id(name, request_id),
            witness_set=check_bytes(name, 'witness_set', witness_set))

    def to_data_item(self):
        rv = {}
        if self.request_id is not None:
            rv[self.REQUEST_ID] = uuid_item(self.request_id)
        rv[self.WITNESS_SET] = self.witness_set
        return rv

    @classmethod
    def from_data_item(cls, item, strict=False):
        rd = MapReader(cls, item, strict=strict)
        return cls(rd.get(cls.WITNESS_SET, 'witness_set'),
                   request_id=rd.request_id(cls.REQUEST_ID))


class CardanoCatalystSignature(RegistryItem):
    #
    # Signature over a Catalyst voting registration.
    #
    registry_type = CARDANO_CATALYST_VOTING_REGISTRATION_SIGNATURE

    REQUEST_ID = 1
    SIGNATURE = 2

    __slots__ = ('request_id', 'signature')

    def __init__(self, signature, request_id=None):
        name = self.registry_type.name
        self._init_fields(
            request_id=check_request_id(name, request_id),
            signature=check_bytes(name, 'signature', signature))

    def to_data_item(self):
        rv = {}
        if self.request_id is not None:
            rv[self.REQUEST_ID] = uuid_item(self.request_id)
        rv[self.SIGNATURE] = self.signature
        return rv

    @classmethod
    def from_data_item(cls, item, strict=False):
        rd = MapReader(cls, item, strict=strict)
        return cls(rd.get(cls.SIGNATURE, 'signature'),
                   request_id=rd.request_id(cls.REQUEST_ID))


EXTENDED_TYPES = [ CardanoUtxo, CardanoSignRequest, CardanoSignature,
                   CardanoCertKey, CardanoCatalystSignature ]

# EOF
