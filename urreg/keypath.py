#
# (c) Copyright 2022 by Coinkite Inc. This file is covered by license found in COPYING-CC.
#
# keypath.py
#
# BIP-32 derivation path with optional source fingerprint (crypto-keypath, BCR-2020-007).
# Nested inside most sign requests.
#
from .constants import *
from .registry import RegistryItem, MapReader, CRYPTO_KEYPATH
from .registry import check_uint
from .exceptions import MalformedField
from .utils import str2path, path2str, xfp_to_int, xfp_to_str

class CryptoKeypath(RegistryItem):
    registry_type = CRYPTO_KEYPATH

    # map keys
    COMPONENTS = 1
    SOURCE_FINGERPRINT = 2
    DEPTH = 3

    __slots__ = ('components', 'source_fingerprint', 'depth')

    def __init__(self, components, source_fingerprint=None, depth=None):
        # components are numbers, with HARDENED bit set where needed
        name = self.registry_type.name
        if isinstance(components, (str, bytes)):
            raise MalformedField(name, 'components', 'must be a sequence of numbers')
        components = tuple(check_uint(name, 'components', c, limit=2*HARDENED)
                                for c in components)

        self._init_fields(
            components=components,
            source_fingerprint=check_uint(name, 'source_fingerprint', source_fingerprint,
                                                optional=True, limit=1<<32),
            depth=check_uint(name, 'depth', depth, optional=True, limit=256))

    @property
    def path(self):
        return path2str(self.components)

    @property
    def xfp(self):
        if self.source_fingerprint is None:
            return None
        return xfp_to_str(self.source_fingerprint)

    @classmethod
    def construct(cls, path, xfp=None, depth=None):
        # path like "m/1852'/1815'/0'" and xfp as hex text "73c5da0a"
        if isinstance(path, str):
            path = str2path(path)

        return cls(path, None if xfp is None else xfp_to_int(xfp), depth)

    def to_data_item(self):
        parts = []
        for i in self.components:
            parts.append(i & ~HARDENED)
            parts.append(bool(i & HARDENED))

        rv = { self.COMPONENTS: parts }
        if self.source_fingerprint is not None:
            rv[self.SOURCE_FINGERPRINT] = self.source_fingerprint
        if self.depth is not None:
            rv[self.DEPTH] = self.depth
        return rv

    @classmethod
    def from_data_item(cls, item, strict=False):
        rd = MapReader(cls, item, strict=strict)
        name = rd.type_name

        parts = rd.array(cls.COMPONENTS, 'components')
        if len(parts) % 2:
            raise MalformedField(name, 'components', 'must be (index, hardened) pairs')

        components = []
        for idx, hard in zip(parts[0::2], parts[1::2]):
            # wildcards and ranges are not supported, only plain numbers
            if not isinstance(idx, int) or isinstance(idx, bool) or not isinstance(hard, bool):
                raise MalformedField(name, 'components', f'unsupported component: {idx!r}')
            if not (0 <= idx < HARDENED):
                raise MalformedField(name, 'components', f'index out of range: {idx}')
            components.append(idx | (HARDENED if hard else 0))

        return cls(components,
                   source_fingerprint=rd.get(cls.SOURCE_FINGERPRINT, 'source_fingerprint', required=False),
                   depth=rd.get(cls.DEPTH, 'depth', required=False))

# EOF
