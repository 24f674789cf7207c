#
# (c) Copyright 2022 by Coinkite Inc. This file is covered by license found in COPYING-CC.
#
# registry.py
#
# Tag catalog, and the base class for records that become tagged CBOR maps.
#
# The generic item tree is whatever cbor2 gives us: dict (int keys), list, bytes,
# str, int ... and CBORTag(tag, value) for tagged nodes. Newer cbor2 versions
# give frozendict and tuple for maps and arrays found inside a tag.
#
import threading, uuid, cbor2
from collections import namedtuple
from collections.abc import Mapping
from enum import Enum
from cbor2 import CBORTag
from .constants import *
from .exceptions import *
from .utils import B2A

# Change this to see encode/decode details
VERBOSE = False

# name is the UR type string, tag may be None (type has no CBOR tag)
RegistryType = namedtuple('RegistryType', 'name tag')

# provided by the shared registry, known to every catalog
BYTES = RegistryType('bytes', None)
UUID = RegistryType('uuid', TAG_UUID)
CRYPTO_KEYPATH = RegistryType('crypto-keypath', TAG_CRYPTO_KEYPATH)

BASE_TYPES = [ BYTES, UUID, CRYPTO_KEYPATH ]

class TagCatalog:
    #
    # Table of tag number => RegistryType, plus the class which decodes each.
    #
    # - written once at import time, then only read
    # - registering is a set-union: same (name, tag) again is a no-op
    #
    def __init__(self, base_types=BASE_TYPES):
        self._lock = threading.Lock()
        self._by_tag = {}
        self._by_name = {}
        self._classes = {}
        self.closed = False

        self.patch_tags(base_types)

    def __len__(self):
        return len(self._by_tag)

    def __iter__(self):
        return iter(sorted(self._by_tag.values(), key=lambda rt: rt.tag))

    def __contains__(self, key):
        return self._find(key) is not None

    def __repr__(self):
        return '<%s: %d tags%s>' % (self.__class__.__name__, len(self),
                                        ' (closed)' if self.closed else '')

    def close(self):
        # no new tags after this point
        self.closed = True

    def register(self, rtype, item_cls=None):
        # Add a single type (and optionally, its decoder class).
        # - returns True if tag is new to the catalog
        if rtype.tag is None:
            raise ValueError(f'type "{rtype.name}" has no tag')

        with self._lock:
            have = self._by_tag.get(rtype.tag)
            if have is not None and have.name != rtype.name:
                raise DuplicateTagRegistration(rtype.tag, have.name, rtype.name)

            other = self._by_name.get(rtype.name)
            if other is not None and other.tag != rtype.tag:
                raise RegistryError(f'type "{rtype.name}" already registered '
                                        f'with tag {other.tag}, not {rtype.tag}')

            if have is None and self.closed:
                raise CatalogClosed(f'catalog is closed, cannot add tag {rtype.tag} ({rtype.name})')

            if item_cls is not None:
                # re-binding is allowed: module reloads create new class objects
                self._classes[rtype.tag] = item_cls

            if have is not None:
                return False

            self._by_tag[rtype.tag] = rtype
            self._by_name[rtype.name] = rtype

        if VERBOSE:
            print(f"++ tag {rtype.tag}: {rtype.name}")

        return True

    def patch_tags(self, types):
        # Register all types that have a tag. Accepts RegistryType values or
        # RegistryItem subclasses (which binds the class as decoder for the tag).
        # - returns list of tags newly added
        added = []
        for t in types:
            if isinstance(t, type) and issubclass(t, RegistryItem):
                rtype, item_cls = t.registry_type, t
            else:
                rtype, item_cls = t, None

            if not rtype.tag:
                continue

            if self.register(rtype, item_cls):
                added.append(rtype.tag)

        return added

    def _find(self, key):
        if isinstance(key, RegistryType):
            got = self._by_tag.get(key.tag)
            return got if got == key else None
        if isinstance(key, str):
            return self._by_name.get(key)
        return self._by_tag.get(key)

    def lookup(self, key):
        # tag number, type name, or RegistryType => RegistryType
        rv = self._find(key)
        if rv is None:
            raise UnknownRegistryType(f'unknown registry type: {key!r}')
        return rv

    def tag_for(self, rtype):
        # tag to use for this type; it must have been registered
        return self.lookup(rtype).tag

    def item_class(self, key):
        # decoder class for tag number or type name
        rtype = self.lookup(key)
        try:
            return self._classes[rtype.tag]
        except KeyError:
            raise UnknownRegistryType(f'no decoder for {rtype.name} (tag {rtype.tag})')

def _catalog(catalog):
    return catalog if catalog is not None else CATALOG

def patch_tags(types, catalog=None):
    return _catalog(catalog).patch_tags(types)

#
# Byte level: cbor2 does all the real work.
#
def encode_data_item(item):
    rv = cbor2.dumps(item)
    if VERBOSE:
        print(f">> encoded {len(rv)} bytes: {B2A(rv)}")
    return rv

def decode_to_data_item(buf):
    # decode errors from cbor2 are not caught here
    if VERBOSE:
        print(f"<< decoding {len(buf)} bytes: {B2A(buf)}")
    return cbor2.loads(buf)

def decode_item(item, catalog=None, strict=False):
    # decode a tagged item using whatever class the catalog has for its tag
    if not isinstance(item, CBORTag):
        raise UnknownRegistryType('item is not tagged, so type is unknown')

    cls = _catalog(catalog).item_class(item.tag)
    return cls.from_data_item(item, strict=strict)

#
# Value checks, used by constructors (and so also by decoding)
#
def check_bytes(type_name, field, value, size=None, optional=False):
    if value is None:
        if optional:
            return None
        raise MissingRequiredField(type_name, field)
    if not isinstance(value, (bytes, bytearray)):
        raise MalformedField(type_name, field, f'must be bytes, got {type(value).__name__}')
    if size is not None and len(value) != size:
        raise MalformedField(type_name, field, f'must be {size} bytes, got {len(value)}')
    return bytes(value)

def check_text(type_name, field, value, optional=False):
    if value is None:
        if optional:
            return None
        raise MissingRequiredField(type_name, field)
    if not isinstance(value, str):
        raise MalformedField(type_name, field, f'must be text, got {type(value).__name__}')
    return value

def check_uint(type_name, field, value, optional=False, limit=None):
    if value is None:
        if optional:
            return None
        raise MissingRequiredField(type_name, field)
    if not isinstance(value, int) or isinstance(value, bool) or value < 0:
        raise MalformedField(type_name, field, f'must be unsigned int, got {value!r}')
    if limit is not None and value >= limit:
        raise MalformedField(type_name, field, f'must be less than {limit}, got {value}')
    return value

def check_enum(type_name, field, value, enum_cls):
    check_uint(type_name, field, value)
    try:
        return enum_cls(value)
    except ValueError:
        raise MalformedField(type_name, field, f'unknown {enum_cls.__name__} value: {value}')

def check_request_id(type_name, value):
    return check_bytes(type_name, 'request_id', value, size=REQUEST_ID_SIZE, optional=True)

def check_items(type_name, field, values, item_cls):
    # sequences of nested entities, stored as tuple
    if values is None:
        raise MissingRequiredField(type_name, field)
    if isinstance(values, (bytes, str, Mapping)):
        raise MalformedField(type_name, field, 'must be a sequence')
    try:
        rv = tuple(values)
    except TypeError:
        raise MalformedField(type_name, field, f"must be a sequence, got {type(values).__name__}")
    for v in rv:
        if not isinstance(v, item_cls):
            raise MalformedField(type_name, field,
                        f'must hold {item_cls.__name__}, got {type(v).__name__}')
    return rv

def check_texts(type_name, field, values, optional=False):
    if values is None:
        if optional:
            return None
        raise MissingRequiredField(type_name, field)
    if isinstance(values, (bytes, str, Mapping)):
        raise MalformedField(type_name, field, 'must be a sequence')
    try:
        values = tuple(values)
    except TypeError:
        raise MalformedField(type_name, field, f"must be a sequence, got {type(values).__name__}")
    return tuple(check_text(type_name, field, v) for v in values)

#
# Encode helpers
#
def uuid_item(request_id, catalog=None):
    # request ids are always written with the UUID tag
    return CBORTag(_catalog(catalog).tag_for(UUID), request_id)

def tag_item(item, catalog=None):
    # nested entity, wrapped in its own registered tag
    return CBORTag(_catalog(catalog).tag_for(item.registry_type), item.to_data_item())


class MapReader:
    #
    # Pulls fields out of a decoded map, checking only presence and node kind.
    # Values are validated further by the record's constructor.
    #
    def __init__(self, cls, item, strict=False, catalog=None):
        self.cls = cls
        self.type_name = cls.registry_type.name
        self.strict = strict
        self.catalog = _catalog(catalog)
        self.map = self._open(item)

    def _open(self, item):
        # top level may be tagged with our own tag, nothing else
        if isinstance(item, CBORTag):
            want = self.catalog.tag_for(self.cls.registry_type)
            if item.tag != want:
                raise MalformedField(self.type_name, '(map)',
                                        f'has tag {item.tag}, expected {want}')
            item = item.value

        if not isinstance(item, Mapping):
            raise MalformedField(self.type_name, '(map)',
                                        f'must be a map, got {type(item).__name__}')
        return item

    def get(self, key, field, required=True):
        if key not in self.map:
            if required:
                raise MissingRequiredField(self.type_name, field)
            return None

        rv = self.map[key]
        if rv is None:
            # absence is the only way to say "not provided"
            raise MalformedField(self.type_name, field, 'is null')
        return rv

    def request_id(self, key, field='request_id'):
        # Permissive: take the inner bytes whatever the tag was.
        # - cbor2 has already converted tag 37 into uuid.UUID for us
        rv = self.get(key, field, required=False)
        if isinstance(rv, uuid.UUID):
            return rv.bytes
        if isinstance(rv, CBORTag):
            return rv.value
        return rv

    def array(self, key, field, required=True):
        rv = self.get(key, field, required=required)
        if rv is not None and not isinstance(rv, (list, tuple)):
            raise MalformedField(self.type_name, field,
                                    f'must be an array, got {type(rv).__name__}')
        return rv

    def _entity(self, value, field, item_cls):
        want = self.catalog.tag_for(item_cls.registry_type)
        if isinstance(value, CBORTag):
            if value.tag != want:
                raise MalformedField(self.type_name, field,
                            f'element has tag {value.tag}, expected {want} ({item_cls.registry_type.name})')
            value = value.value
        elif self.strict:
            raise MalformedField(self.type_name, field,
                            f'element is untagged, expected tag {want} ({item_cls.registry_type.name})')

        return item_cls.from_data_item(value, strict=self.strict)

    def entity(self, key, field, item_cls, required=True):
        rv = self.get(key, field, required=required)
        if rv is None:
            return None
        return self._entity(rv, field, item_cls)

    def entities(self, key, field, item_cls, required=True):
        # decoded in encoded order
        rv = self.array(key, field, required=required)
        if rv is None:
            return None
        return [self._entity(v, field, item_cls) for v in rv]


class RegistryItem:
    #
    # Base class for all records and nested entities.
    #
    # - immutable once constructed
    # - subclasses list their fields in __slots__, in key order
    #
    registry_type = None
    __slots__ = ()

    def _init_fields(self, **kws):
        for fn in self.__slots__:
            object.__setattr__(self, fn, kws[fn])

    def __setattr__(self, name, value):
        raise AttributeError(f"{self.__class__.__name__} is immutable")

    def __delattr__(self, name):
        raise AttributeError(f"{self.__class__.__name__} is immutable")

    def __getstate__(self):
        return dict(zip(self.__slots__, self._values()))

    def __setstate__(self, state):
        # copy and pickle land here, not in __setattr__
        for fn, v in state.items():
            object.__setattr__(self, fn, v)

    def _values(self):
        return tuple(getattr(self, fn) for fn in self.__slots__)

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self._values() == other._values()

    def __hash__(self):
        return hash((type(self).__name__,) + self._values())

    def __repr__(self):
        parts = []
        for fn, v in zip(self.__slots__, self._values()):
            if v is None:
                continue
            if isinstance(v, bytes):
                v = B2A(v)
            parts.append(f'{fn}={v!r}')
        return '<%s %s>' % (self.__class__.__name__, ' '.join(parts))

    def to_data_item(self):
        # untagged map of populated fields only
        raise NotImplementedError

    @classmethod
    def from_data_item(cls, item, strict=False):
        raise NotImplementedError

    def to_tagged_item(self, catalog=None):
        # for embedding in a larger context; outermost objects are not tagged
        return tag_item(self, catalog)

    def to_cbor(self):
        return encode_data_item(self.to_data_item())

    @classmethod
    def from_cbor(cls, buf, strict=False):
        return cls.from_data_item(decode_to_data_item(buf), strict=strict)

    def as_dict(self):
        # plain values for display: bytes as hex, nested items as dicts
        rv = {}
        for fn, v in zip(self.__slots__, self._values()):
            if v is None:
                continue
            rv[fn] = _plain(v)
        return rv

def _plain(v):
    if isinstance(v, RegistryItem):
        return v.as_dict()
    if isinstance(v, bytes):
        return B2A(v)
    if isinstance(v, tuple):
        return [_plain(i) for i in v]
    if isinstance(v, Enum):
        return v.name
    return v

# the process-wide catalog
CATALOG = TagCatalog()

# EOF
