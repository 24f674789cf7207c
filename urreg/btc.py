#
# (c) Copyright 2022 by Coinkite Inc. This file is covered by license found in COPYING-CC.
#
# btc.py
#
# Bitcoin message signing: request and signature.
#
from enum import IntEnum
from .constants import *
from .registry import RegistryItem, RegistryType, MapReader
from .registry import uuid_item, tag_item
from .registry import check_bytes, check_text, check_texts, check_enum, check_items, check_request_id
from .keypath import CryptoKeypath
from .utils import force_bytes, uuid_to_bytes

BTC_SIGN_REQUEST = RegistryType('btc-sign-request', TAG_BTC_SIGN_REQUEST)
BTC_SIGNATURE = RegistryType('btc-signature', TAG_BTC_SIGNATURE)

class DataType(IntEnum):
    MESSAGE = 1


class BtcSignRequest(RegistryItem):
    registry_type = BTC_SIGN_REQUEST

    REQUEST_ID = 1
    SIGN_DATA = 2
    DATA_TYPE = 3
    DERIVATION_PATHS = 4
    ADDRESSES = 5
    ORIGIN = 6

    __slots__ = ('request_id', 'sign_data', 'data_type', 'derivation_paths',
                    'addresses', 'origin')

    def __init__(self, sign_data, data_type, derivation_paths, request_id=None,
                        addresses=None, origin=None):
        name = self.registry_type.name
        self._init_fields(
            request_id=check_request_id(name, request_id),
            sign_data=check_bytes(name, 'sign_data', sign_data),
            data_type=check_enum(name, 'data_type', data_type, DataType),
            derivation_paths=check_items(name, 'derivation_paths', derivation_paths, CryptoKeypath),
            addresses=check_texts(name, 'addresses', addresses, optional=True),
            origin=check_text(name, 'origin', origin, optional=True))

    @classmethod
    def construct(cls, sign_data, hd_paths, xfps, uuid_string=None, addresses=None,
                        origin=None, data_type=DataType.MESSAGE):
        # one xfp per path, paths like "m/84'/0'/0'/0/0"
        if len(hd_paths) != len(xfps):
            raise ValueError("Need one fingerprint per path")

        if isinstance(sign_data, str):
            # text message to be signed, not hex
            sign_data = sign_data.encode('utf-8')

        return cls(sign_data, data_type,
                   [CryptoKeypath.construct(p, x) for p, x in zip(hd_paths, xfps)],
                   request_id=uuid_to_bytes(uuid_string) if uuid_string else None,
                   addresses=addresses or None,
                   origin=origin or None)

    def to_data_item(self):
        rv = {}
        if self.request_id is not None:
            rv[self.REQUEST_ID] = uuid_item(self.request_id)

        rv[self.SIGN_DATA] = self.sign_data
        rv[self.DATA_TYPE] = int(self.data_type)
        rv[self.DERIVATION_PATHS] = [tag_item(p) for p in self.derivation_paths]

        if self.addresses is not None:
            rv[self.ADDRESSES] = list(self.addresses)
        if self.origin is not None:
            rv[self.ORIGIN] = self.origin

        return rv

    @classmethod
    def from_data_item(cls, item, strict=False):
        rd = MapReader(cls, item, strict=strict)
        return cls(rd.get(cls.SIGN_DATA, 'sign_data'),
                   rd.get(cls.DATA_TYPE, 'data_type'),
                   rd.entities(cls.DERIVATION_PATHS, 'derivation_paths', CryptoKeypath),
                   request_id=rd.request_id(cls.REQUEST_ID),
                   addresses=rd.array(cls.ADDRESSES, 'addresses', required=False),
                   origin=rd.get(cls.ORIGIN, 'origin', required=False))


class BtcSignature(RegistryItem):
    #
    # Signature (65 bytes, recoverable) and the pubkey that made it.
    #
    registry_type = BTC_SIGNATURE

    REQUEST_ID = 1
    SIGNATURE = 2
    PUBLIC_KEY = 3

    __slots__ = ('request_id', 'signature', 'public_key')

    def __init__(self, signature, public_key, request_id=None):
        name = self.registry_type.name
        self._init_fields(
            request_id=check_request_id(name, request_id),
            signature=check_bytes(name, 'signature', signature),
            public_key=check_bytes(name, 'public_key', public_key, size=BTC_PUBKEY_SIZE))

    @classmethod
    def construct(cls, signature, public_key, uuid_string=None):
        return cls(force_bytes(signature), force_bytes(public_key),
                   request_id=uuid_to_bytes(uuid_string) if uuid_string else None)

    def to_data_item(self):
        rv = {}
        if self.request_id is not None:
            rv[self.REQUEST_ID] = uuid_item(self.request_id)
        rv[self.SIGNATURE] = self.signature
        rv[self.PUBLIC_KEY] = self.public_key
        return rv

    @classmethod
    def from_data_item(cls, item, strict=False):
        rd = MapReader(cls, item, strict=strict)
        return cls(rd.get(cls.SIGNATURE, 'signature'),
                   rd.get(cls.PUBLIC_KEY, 'public_key'),
                   request_id=rd.request_id(cls.REQUEST_ID))


EXTENDED_TYPES = [ BtcSignRequest, BtcSignature ]

# EOF
