import os, json
from collections import namedtuple
from .errors import WrongGroupError
from .params import DefaultParams, Params
from .util import random_exponent, number_to_bytes, bytes_to_number

StaticKeyPair = namedtuple("StaticKeyPair", ["private_key", "public_key"])

def _exponent_from_bytes(params, b):
    # private keys are fixed-width: reject anything else instead of
    # silently computing with the wrong number
    q = params.group.subgroup_order()
    length = params.group.scalar_size_bytes
    if not isinstance(b, (bytes, bytearray)) or len(b) != length:
        raise ValueError("private key should be %d bytes" % length)
    x = bytes_to_number(b)
    if not 1 <= x < q:
        raise ValueError("private exponent out of range")
    return x

class EphemeralKeyPair:
    """A freshly generated exponent x together with the encoded public
    element X = Base^x. Each one may be used for a single agreement: re-using
    it gives up forward secrecy."""

    def __init__(self, params, exponent, public_key):
        assert isinstance(params, Params), repr(params)
        self.params = params
        self.exponent = exponent
        self.public_key = public_key

    def exponent_bytes(self):
        q = self.params.group.subgroup_order()
        return number_to_bytes(self.exponent, q)

    def to_bytes(self):
        # the packed form: exponent bytes, then the encoded public element
        return self.exponent_bytes() + self.public_key

    @classmethod
    def from_bytes(klass, data, params=DefaultParams):
        g = KeyPairGenerator(params)
        if len(data) != g.ephemeral_private_key_length():
            raise ValueError("packed ephemeral key should be %d bytes"
                             % g.ephemeral_private_key_length())
        split = g.static_private_key_length()
        x = _exponent_from_bytes(params, data[:split])
        return klass(params, x, bytes(data[split:]))

    def serialize(self):
        d = {"hashed_params": self.params.hash_params(),
             "exponent": self.exponent_bytes().hex(),
             "public_key": self.public_key.hex(),
             }
        return json.dumps(d).encode("ascii")

    @classmethod
    def from_serialized(klass, data, params=DefaultParams):
        d = json.loads(data.decode("ascii"))
        if d["hashed_params"] != params.hash_params():
            err = ("EphemeralKeyPair.from_serialized() must be called with "
                   "the same params= that were used to create the "
                   "serialized data. These are different somehow.")
            raise WrongGroupError(err)
        x = _exponent_from_bytes(params, bytes.fromhex(d["exponent"]))
        return klass(params, x, bytes.fromhex(d["public_key"]))

    def __eq__(self, other):
        if not isinstance(other, EphemeralKeyPair):
            return NotImplemented
        return (self.params is other.params and
                self.to_bytes() == other.to_bytes())

    def __hash__(self):
        return hash(self.to_bytes())

    def __repr__(self):
        return "<EphemeralKeyPair public=%s>" % self.public_key.hex()


class KeyPairGenerator:
    """Creates static and ephemeral key material for one parameter set.

    entropy_f should behave like os.urandom. The only reason to pass
    anything else is for deterministic unit tests.
    """

    def __init__(self, params=DefaultParams, entropy_f=os.urandom):
        assert isinstance(params, Params), repr(params)
        self.params = params
        self.entropy_f = entropy_f

    def static_private_key_length(self):
        return self.params.group.scalar_size_bytes

    def static_public_key_length(self):
        return self.params.group.encoded_element_size()

    def ephemeral_private_key_length(self):
        return (self.static_private_key_length() +
                self.static_public_key_length())

    def ephemeral_public_key_length(self):
        return self.static_public_key_length()

    def _random_exponent(self):
        return random_exponent(self.params.group.max_exponent(),
                               self.entropy_f)

    def generate_static_private_key(self):
        q = self.params.group.subgroup_order()
        return number_to_bytes(self._random_exponent(), q)

    def generate_static_public_key(self, private_key):
        x = _exponent_from_bytes(self.params, private_key)
        return self.params.group.exponentiate_base(x).to_bytes()

    def generate_static_key_pair(self):
        private_key = self.generate_static_private_key()
        return StaticKeyPair(private_key,
                             self.generate_static_public_key(private_key))

    def generate_ephemeral_private_key(self):
        x = self._random_exponent()
        X = self.params.group.exponentiate_base(x)
        return EphemeralKeyPair(self.params, x, X.to_bytes())

    def extract_ephemeral_public_key(self, ephemeral_private_key):
        # a slice, never a recomputation
        if isinstance(ephemeral_private_key, EphemeralKeyPair):
            return ephemeral_private_key.public_key
        if len(ephemeral_private_key) != self.ephemeral_private_key_length():
            raise ValueError("packed ephemeral key should be %d bytes"
                             % self.ephemeral_private_key_length())
        return bytes(
            ephemeral_private_key[self.static_private_key_length():])

    def load_ephemeral_private_key(self, ephemeral_private_key):
        if isinstance(ephemeral_private_key, EphemeralKeyPair):
            if ephemeral_private_key.params is not self.params:
                raise WrongGroupError("ephemeral key made under other params")
            return ephemeral_private_key
        return EphemeralKeyPair.from_bytes(ephemeral_private_key, self.params)

    def load_static_private_key(self, private_key):
        return _exponent_from_bytes(self.params, private_key)
