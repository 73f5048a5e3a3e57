import os, logging
from collections import namedtuple
from .errors import BadElement, UnknownRole
from .keys import KeyPairGenerator
from .params import DefaultParams, Params
from .util import bytes_to_number

log = logging.getLogger(__name__)

RoleInitiator = b"I"
RoleResponder = b"R"

class AgreementResult(namedtuple("AgreementResult",
                                 ["success", "agreed_value"])):
    """What agree() returns. agreed_value is None unless success is True.
    The result is also truthy exactly when the agreement succeeded."""
    __slots__ = ()

    def __bool__(self):
        return self.success

FAILED = AgreementResult(False, None)

# Initiator: static a, A=g^a, ephemeral x, X=g^x
# Responder: static b, B=g^b, ephemeral y, Y=g^y
#
# d = H(X, Y, A, B) mod q
# e = H(Y, X, A, B) mod q
#
# s_A = x + d*a mod q
# sigma = (Y * B^e)^s_A
#  s_B = y + e*b mod q
#  sigma = (X * A^d)^s_B
#
# both sides get g^((x+d*a)*(y+e*b)), and the agreed value is
# key = H(sigma, X, Y, A, B)

class _FHMQV_Base:
    "This class manages one side of an FHMQV key agreement."

    role = None # set by the subclass

    def __init__(self, params=DefaultParams, entropy_f=os.urandom):
        if self.role not in (RoleInitiator, RoleResponder):
            raise UnknownRole("use FHMQV_Initiator or FHMQV_Responder")
        assert isinstance(params, Params), repr(params)
        self.params = params
        self.keys = KeyPairGenerator(params, entropy_f=entropy_f)

    def static_private_key_length(self):
        return self.keys.static_private_key_length()
    def static_public_key_length(self):
        return self.keys.static_public_key_length()
    def ephemeral_private_key_length(self):
        return self.keys.ephemeral_private_key_length()
    def ephemeral_public_key_length(self):
        return self.keys.ephemeral_public_key_length()
    def agreed_value_length(self):
        return self.params.hasher.digest_size

    def generate_static_private_key(self):
        return self.keys.generate_static_private_key()
    def generate_static_public_key(self, private_key):
        return self.keys.generate_static_public_key(private_key)
    def generate_ephemeral_private_key(self):
        return self.keys.generate_ephemeral_private_key()
    def extract_ephemeral_public_key(self, ephemeral_private_key):
        return self.keys.extract_ephemeral_public_key(ephemeral_private_key)

    def _decode_other(self, encoded, level, which):
        g = self.params.group
        try:
            element = g.decode_element(encoded)
        except BadElement as e:
            log.debug("rejecting %s public key: %s", which, e)
            return None
        if not g.validate_element(level, element):
            log.debug("rejecting %s public key: failed level %d validation",
                      which, level)
            return None
        return element

    def agree(self, static_private_key, ephemeral_private_key,
              static_other_public_key, ephemeral_other_public_key,
              validate_static_other_public_key=True):
        """Derive the agreed value from our private keys and the other
        side's public keys.

        The other side's ephemeral key is always fully validated. If their
        static key was already validated earlier, pass
        validate_static_other_public_key=False to only check that it is a
        group member.

        Returns an AgreementResult. When success is False, nothing about
        why is reported, and none of this key material should be used
        again.
        """
        for pubkey in (static_other_public_key, ephemeral_other_public_key):
            if not isinstance(pubkey, (bytes, bytearray)):
                raise TypeError("public keys must be bytes, not %r"
                                % type(pubkey))
        g = self.params.group
        hasher = self.params.hasher
        my_static = self.keys.load_static_private_key(static_private_key)
        my_ephemeral = self.keys.load_ephemeral_private_key(
            ephemeral_private_key)

        # the static public key is not stored anywhere, so recompute it
        my_static_public = g.exponentiate_base(my_static).to_bytes()
        XX = self.X_msg(my_ephemeral.public_key,
                        bytes(ephemeral_other_public_key))
        YY = self.Y_msg(my_ephemeral.public_key,
                        bytes(ephemeral_other_public_key))
        AA = self.A_msg(my_static_public, bytes(static_other_public_key))
        BB = self.B_msg(my_static_public, bytes(static_other_public_key))

        static_level = 3 if validate_static_other_public_key else 1
        other_static = self._decode_other(static_other_public_key,
                                          static_level, "static")
        if other_static is None:
            return FAILED
        # ephemeral keys are never validated ahead of time
        other_ephemeral = self._decode_other(ephemeral_other_public_key,
                                             3, "ephemeral")
        if other_ephemeral is None:
            return FAILED

        q = g.subgroup_order()
        d = bytes_to_number(hasher.challenge_hash(XX, YY, AA, BB)) % q
        e = bytes_to_number(hasher.challenge_hash(YY, XX, AA, BB)) % q

        sigma = self.shared_element(my_static, my_ephemeral.exponent, d, e,
                                    other_static, other_ephemeral)
        agreed_value = hasher.key_hash(sigma, XX, YY, AA, BB,
                                       self.agreed_value_length())
        return AgreementResult(True, agreed_value)

    def __repr__(self):
        return "<%s %r>" % (self.__class__.__name__, self.params)

# applications should use FHMQV_Initiator and FHMQV_Responder (or the
# FHMQV() factory), not raw _FHMQV_Base()

class FHMQV_Initiator(_FHMQV_Base):
    role = RoleInitiator
    def X_msg(self, mine, theirs): return mine
    def Y_msg(self, mine, theirs): return theirs
    def A_msg(self, mine, theirs): return mine
    def B_msg(self, mine, theirs): return theirs

    def shared_element(self, a, x, d, e, B, Y):
        s_A = (x + d * a) % self.params.group.subgroup_order()
        return Y.multiply(B.exponentiate(e)).exponentiate(s_A)

class FHMQV_Responder(_FHMQV_Base):
    role = RoleResponder
    def X_msg(self, mine, theirs): return theirs
    def Y_msg(self, mine, theirs): return mine
    def A_msg(self, mine, theirs): return theirs
    def B_msg(self, mine, theirs): return mine

    def shared_element(self, b, y, d, e, A, X):
        s_B = (y + e * b) % self.params.group.subgroup_order()
        return X.multiply(A.exponentiate(d)).exponentiate(s_B)

def FHMQV(role, params=DefaultParams, entropy_f=os.urandom):
    if role == RoleInitiator:
        return FHMQV_Initiator(params, entropy_f=entropy_f)
    if role == RoleResponder:
        return FHMQV_Responder(params, entropy_f=entropy_f)
    raise UnknownRole("role must be RoleInitiator or RoleResponder, not %r"
                      % (role,))
