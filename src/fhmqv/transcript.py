import hashlib
from .util import size_bits

# d = H(X, Y, A, B)          truncated to about half the bits of q
# e = H(Y, X, A, B)          likewise
# K = H(sigma, X, Y, A, B)   truncated to the requested key length
#
# X/Y are the Initiator's/Responder's ephemeral public keys and A/B their
# static public keys, always in that order no matter which side is hashing.

def challenge_length(q):
    # half the bit length of q, rounded up to whole bytes
    return ((size_bits(q) + 1) // 2 + 7) // 8

class TranscriptHasher:
    def __init__(self, group, hashfunc=hashlib.sha256):
        self.group = group
        self.hashfunc = hashfunc
        self.digest_size = hashfunc().digest_size

    def challenge_length(self):
        return challenge_length(self.group.subgroup_order())

    def _digest(self, pieces, length):
        if length > self.digest_size:
            raise ValueError("asked for %d bytes from a %d-byte hash"
                             % (length, self.digest_size))
        h = self.hashfunc()
        for piece in pieces:
            h.update(piece)
        return h.digest()[:length]

    def challenge_hash(self, e1, e2, s1, s2):
        """Digest used for the d and e challenges. No group element is
        prefixed."""
        return self._digest([e1, e2, s1, s2], self.challenge_length())

    def key_hash(self, sigma, e1, e2, s1, s2, length=None):
        """Digest of the shared element and the transcript, giving the
        agreed value."""
        if length is None:
            length = self.digest_size
        sigma_bytes = self.group.encode_element(sigma)
        return self._digest([sigma_bytes, e1, e2, s1, s2], length)
