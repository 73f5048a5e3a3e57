import hashlib
from .groups import I1024, I2048, I3072
from .ec_groups import P256, P384, SECP256K1
from .transcript import TranscriptHasher
from .util import number_to_bytes

# A parameter set is a group plus the hash used for d, e and the agreed
# value. Both sides must use the same one, otherwise the failure mode is
# silent key disagreement.

class Params:
    def __init__(self, group, hashfunc=hashlib.sha256):
        self.group = group
        self.hashfunc = hashfunc
        self.hasher = TranscriptHasher(group, hashfunc)

    def hash_params(self):
        # enough to notice when packed key material is restored under
        # a different group or hash
        g = self.group
        q = g.subgroup_order()
        pieces = [g.name.encode("ascii"),
                  g.exponentiate_base(1).to_bytes(),
                  number_to_bytes(q, q),
                  self.hashfunc().name.encode("ascii"),
                  ]
        return hashlib.sha256(b"\x00".join(pieces)).hexdigest()

    def __repr__(self):
        return "<Params %s/%s>" % (self.group.name, self.hashfunc().name)

# ParamsI1024 is roughly as secure as an 80-bit symmetric key, and uses a
# 1024-bit modulus. ParamsI2048 has 112-bit security and ParamsI3072 has
# 128-bit security. The curve sets are 128-bit (P-256, secp256k1) and
# 192-bit (P-384).
ParamsI1024 = Params(I1024)
ParamsI2048 = Params(I2048)
ParamsI3072 = Params(I3072)

ParamsP256 = Params(P256)
ParamsP384 = Params(P384, hashfunc=hashlib.sha384)
ParamsSECP256K1 = Params(SECP256K1)

DefaultParams = ParamsP256
