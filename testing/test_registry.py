#
# (c) Copyright 2022 by Coinkite Inc. This file is covered by license found in COPYING-CC.
#
# Tag catalog: registration, lookups, tag dispatch.
#
import threading
import pytest
from cbor2 import CBORTag

import urreg
from urreg.registry import TagCatalog, RegistryType, CATALOG, BASE_TYPES
from urreg.registry import patch_tags, decode_item, tag_item, uuid_item
from urreg.exceptions import DuplicateTagRegistration, CatalogClosed, UnknownRegistryType
from urreg.exceptions import RegistryError
from urreg import CardanoSignRequest, CardanoCatalystSignature, CryptoKeypath

NEW_TAGS = { 2201, 2202, 2203, 2204, 2208, 8101, 8102, 8201, 8202 }

def test_base_types():
    cat = TagCatalog()
    # "bytes" has no tag, so only two entries
    assert len(cat) == 2
    assert [rt.tag for rt in cat] == [37, 304]
    assert 'uuid' in cat
    assert 'bytes' not in cat

def test_tags_unique():
    tags = [t.registry_type.tag for t in urreg.EXTENDED_TYPES]
    assert len(tags) == len(set(tags))
    names = [t.registry_type.name for t in urreg.EXTENDED_TYPES]
    assert len(names) == len(set(names))

def test_register_all():
    cat = TagCatalog()
    added = cat.patch_tags(urreg.EXTENDED_TYPES)
    assert set(added) == NEW_TAGS
    assert len(added) == len(NEW_TAGS)
    assert len(cat) == 2 + len(NEW_TAGS)

    # second time: nothing new, no errors
    assert cat.patch_tags(urreg.EXTENDED_TYPES) == []
    assert len(cat) == 2 + len(NEW_TAGS)

def test_process_catalog():
    # package import did the registration already
    for t in urreg.EXTENDED_TYPES:
        assert t.registry_type in CATALOG
        assert CATALOG.item_class(t.registry_type.tag) is t

    # and again is a no-op
    assert patch_tags(urreg.EXTENDED_TYPES) == []

def test_duplicate_tag():
    cat = TagCatalog()
    cat.patch_tags(urreg.EXTENDED_TYPES)

    with pytest.raises(DuplicateTagRegistration) as err:
        cat.register(RegistryType('evil-utxo', 2201))
    assert err.value.tag == 2201
    assert 'cardano-utxo' in str(err.value)

    # same name, other tag
    with pytest.raises(RegistryError):
        cat.register(RegistryType('cardano-utxo', 9999))

    assert cat.lookup(2201).name == 'cardano-utxo'
    assert 9999 not in cat

def test_no_tag():
    cat = TagCatalog()
    with pytest.raises(ValueError):
        cat.register(RegistryType('bytes', None))
    assert cat.patch_tags([RegistryType('bytes', None)]) == []

def test_closed():
    cat = TagCatalog()
    cat.patch_tags(urreg.EXTENDED_TYPES)
    cat.close()
    assert cat.closed

    with pytest.raises(CatalogClosed):
        cat.register(RegistryType('new-thing', 9999))
    assert 9999 not in cat

    # refused registration leaves no class behind
    with pytest.raises(CatalogClosed):
        cat.register(RegistryType('new-thing', 9999), CardanoCatalystSignature)
    with pytest.raises(UnknownRegistryType):
        cat.item_class(9999)

    # already known: still fine
    assert cat.patch_tags(urreg.EXTENDED_TYPES) == []

def test_concurrent_registration():
    cat = TagCatalog()
    results = []
    errors = []

    def worker():
        try:
            results.append(cat.patch_tags(urreg.EXTENDED_TYPES))
        except Exception as exc:
            errors.append(exc)

    threads = [threading.Thread(target=worker) for i in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert not errors
    added = [tag for r in results for tag in r]
    assert sorted(added) == sorted(NEW_TAGS)

def test_lookups():
    assert CATALOG.lookup('cardano-sign-request').tag == 2202
    assert CATALOG.lookup(8201).name == 'stellar-sign-request'
    assert CATALOG.tag_for(CardanoSignRequest.registry_type) == 2202
    assert CATALOG.item_class('crypto-keypath') is CryptoKeypath

    with pytest.raises(UnknownRegistryType):
        CATALOG.lookup(12345)
    with pytest.raises(KeyError):
        CATALOG.lookup('no-such-type')

    # known tag, but no class to decode it
    with pytest.raises(UnknownRegistryType):
        CATALOG.item_class('uuid')

    # same tag, other name: not a match
    assert RegistryType('not-uuid', 37) not in CATALOG

def test_tag_needs_registration(cert_key):
    # a catalog without Cardano types cannot tag Cardano items
    cat = TagCatalog()
    with pytest.raises(UnknownRegistryType):
        tag_item(cert_key, catalog=cat)

    rv = tag_item(cert_key)
    assert rv == CBORTag(2204, cert_key.to_data_item())
    assert cert_key.to_tagged_item() == rv

def test_uuid_item(request_id):
    assert uuid_item(request_id) == CBORTag(37, request_id)

def test_decode_item(request_id):
    sig = CardanoCatalystSignature(b'\x11' * 64, request_id)
    got = decode_item(sig.to_tagged_item())
    assert isinstance(got, CardanoCatalystSignature)
    assert got == sig

    with pytest.raises(UnknownRegistryType):
        decode_item(sig.to_data_item())

    with pytest.raises(UnknownRegistryType):
        decode_item(CBORTag(4444, {}))

    # catalog without the cardano classes
    with pytest.raises(UnknownRegistryType):
        decode_item(sig.to_tagged_item(), catalog=TagCatalog())

def test_immutable(keypath):
    with pytest.raises(AttributeError):
        keypath.depth = 3
    with pytest.raises(AttributeError):
        del keypath.components
    with pytest.raises(AttributeError):
        keypath.something = 1

# EOF
