#
# (c) Copyright 2021 by Coinkite Inc. This file is covered by license found in COPYING-CC.
#

__version__ = '0.9.0'

__all__ = [ 'registry', 'exceptions', 'constants', 'utils', 'keypath',
            'cardano', 'btc', 'stellar' ]

from urreg.registry import CATALOG, TagCatalog, RegistryType, RegistryItem
from urreg.registry import patch_tags, decode_item
from urreg.keypath import CryptoKeypath

from urreg.cardano import CardanoUtxo, CardanoCertKey, CardanoSignRequest
from urreg.cardano import CardanoSignature, CardanoCatalystSignature
from urreg.btc import BtcSignRequest, BtcSignature, DataType
from urreg.stellar import StellarSignRequest, StellarSignature, SignType

from urreg import cardano, btc, stellar

# every type with a tag goes into the shared catalog, once
EXTENDED_TYPES = [ CryptoKeypath ] + cardano.EXTENDED_TYPES \
                    + btc.EXTENDED_TYPES + stellar.EXTENDED_TYPES

patch_tags(EXTENDED_TYPES)

# EOF
