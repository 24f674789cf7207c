#
# (c) Copyright 2022 by Coinkite Inc. This file is covered by license found in COPYING-CC.
#
# stellar.py
#
# Stellar sign request (transaction or transaction hash) and signature.
#
from enum import IntEnum
from .constants import *
from .registry import RegistryItem, RegistryType, MapReader
from .registry import uuid_item, tag_item
from .registry import check_bytes, check_text, check_enum, check_request_id
from .keypath import CryptoKeypath
from .exceptions import MalformedField
from .utils import force_bytes, uuid_to_bytes

STELLAR_SIGN_REQUEST = RegistryType('stellar-sign-request', TAG_STELLAR_SIGN_REQUEST)
STELLAR_SIGNATURE = RegistryType('stellar-signature', TAG_STELLAR_SIGNATURE)

class SignType(IntEnum):
    TRANSACTION = 1
    TRANSACTION_HASH = 2


class StellarSignRequest(RegistryItem):
    registry_type = STELLAR_SIGN_REQUEST

    REQUEST_ID = 1
    SIGN_DATA = 2
    DERIVATION_PATH = 3
    ADDRESS = 4
    ORIGIN = 5
    SIGN_TYPE = 6

    __slots__ = ('request_id', 'sign_data', 'derivation_path', 'address', 'origin',
                    'sign_type')

    def __init__(self, sign_data, derivation_path, sign_type, request_id=None,
                        address=None, origin=None):
        name = self.registry_type.name

        if not isinstance(derivation_path, CryptoKeypath):
            raise MalformedField(name, 'derivation_path', 'must be CryptoKeypath')

        self._init_fields(
            request_id=check_request_id(name, request_id),
            sign_data=check_bytes(name, 'sign_data', sign_data),
            derivation_path=derivation_path,
            address=check_bytes(name, 'address', address, optional=True),
            origin=check_text(name, 'origin', origin, optional=True),
            sign_type=check_enum(name, 'sign_type', sign_type, SignType))

    @classmethod
    def construct(cls, sign_data, hd_path, xfp, sign_type, uuid_string=None,
                        address=None, origin=None):
        # address is text (strkey "G...") and carried as its bytes
        if isinstance(address, str):
            address = address.encode('ascii')

        return cls(force_bytes(sign_data), CryptoKeypath.construct(hd_path, xfp), sign_type,
                   request_id=uuid_to_bytes(uuid_string) if uuid_string else None,
                   address=address or None,
                   origin=origin or None)

    def to_data_item(self):
        rv = {}
        if self.request_id is not None:
            rv[self.REQUEST_ID] = uuid_item(self.request_id)

        rv[self.SIGN_DATA] = self.sign_data
        rv[self.DERIVATION_PATH] = tag_item(self.derivation_path)

        if self.address is not None:
            rv[self.ADDRESS] = self.address
        if self.origin is not None:
            rv[self.ORIGIN] = self.origin

        rv[self.SIGN_TYPE] = int(self.sign_type)
        return rv

    @classmethod
    def from_data_item(cls, item, strict=False):
        rd = MapReader(cls, item, strict=strict)
        return cls(rd.get(cls.SIGN_DATA, 'sign_data'),
                   rd.entity(cls.DERIVATION_PATH, 'derivation_path', CryptoKeypath),
                   rd.get(cls.SIGN_TYPE, 'sign_type'),
                   request_id=rd.request_id(cls.REQUEST_ID),
                   address=rd.get(cls.ADDRESS, 'address', required=False),
                   origin=rd.get(cls.ORIGIN, 'origin', required=False))


class StellarSignature(RegistryItem):
    registry_type = STELLAR_SIGNATURE

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


EXTENDED_TYPES = [ StellarSignRequest, StellarSignature ]

# EOF
