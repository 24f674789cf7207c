#
# (c) Copyright 2021 by Coinkite Inc. This file is covered by license found in COPYING-CC.
#
# Conversions from human-friendly inputs into canonical field values.
#
import uuid
from binascii import b2a_hex, a2b_hex
from .constants import *

# show bytes as hex in a string
B2A = lambda x: b2a_hex(x).decode('ascii')

def force_bytes(foo):
    # accept hex strings or bytes where bytes are needed
    if isinstance(foo, str):
        if foo[0:2].lower() == '0x':
            foo = foo[2:]
        try:
            return a2b_hex(foo)
        except ValueError:
            raise ValueError(f"Not hex: {foo!r}")
    if not isinstance(foo, (bytes, bytearray)):
        # bytes(4) would be four zeros
        raise TypeError(f"Need hex text or bytes, got {type(foo).__name__}")
    return bytes(foo)

def uuid_to_bytes(txt):
    # "9b1deb4d-3b7d-4bad-9bdd-2b0d7b3dcb6d" => 16 bytes
    if isinstance(txt, uuid.UUID):
        return txt.bytes
    try:
        return uuid.UUID(txt).bytes
    except ValueError:
        raise ValueError(f"Malformed UUID: {txt}")

def bytes_to_uuid(b):
    # for display only
    return str(uuid.UUID(bytes=b))

def xfp_to_int(xfp):
    # master fingerprint: hex text (as shown by wallets) or 4 raw bytes => uint32
    if isinstance(xfp, int):
        return xfp
    raw = force_bytes(xfp)
    if len(raw) != XFP_SIZE:
        raise ValueError(f"Fingerprint must be {XFP_SIZE} bytes: {xfp}")
    return int.from_bytes(raw, 'big')

def xfp_to_str(xfp):
    return B2A(xfp.to_bytes(XFP_SIZE, 'big'))

def path_component_in_range(num: int) -> bool:
    # cannot be less than 0
    # cannot be more than (2 ** 31) - 1
    if 0 <= num < HARDENED:
        return True
    return False

def path2str(path):
    # take numeric path (list of numbers) and convert to human form
    # - standardizing on "m/84h" style
    return '/'.join(['m'] + [str(i & ~HARDENED)+('h' if i&HARDENED else '') for i in path])

def str2path(path):
    # normalize notation and return numbers
    rv = []

    for i in path.split('/'):
        if i == 'm':
            continue
        if not i:
            # trailing or duplicated slashes
            continue

        if i[-1] in "'phHP":
            if len(i) < 2:
                raise ValueError(f"Malformed bip32 path component: {i}")
            num = int(i[:-1], 0)
            if not path_component_in_range(num):
                raise ValueError(f"Hardened path component out of range: {i}")
            here = num | HARDENED
        else:
            here = int(i, 0)
            if not path_component_in_range(here):
                raise ValueError(f"Non-hardened path component out of range: {i}")

        rv.append(here)

    return rv


# EOF
