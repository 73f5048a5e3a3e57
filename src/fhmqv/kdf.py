import hashlib
from hkdf import Hkdf

def expand_agreed_value(agreed_value, info=b"", length=32, salt=b"",
                        hashfunc=hashlib.sha256):
    """Stretch an FHMQV agreed value into session keys.

    The agreed value is a single hash output. Applications that need more
    than one key (say, one per direction) should derive each of them here
    under a distinct info string, rather than slicing the agreed value.
    """
    assert isinstance(agreed_value, bytes)
    assert isinstance(info, bytes)
    h = Hkdf(salt=salt, input_key_material=agreed_value, hash=hashfunc)
    return h.expand(info, length)
