from ecdsa import curves, ellipticcurve, numbertheory
from .errors import BadElement
from .groups import _Element
from .util import size_bytes, bytes_to_number, number_to_bytes

# Prime-field Weierstrass curves, using python-ecdsa for the point
# arithmetic. Elements are encoded as SEC1 compressed points: a 0x02/0x03
# byte carrying the parity of y, then x. The point at infinity has no SEC1
# compressed form, so it goes into the transcript as all zeros, which
# decode_element() never accepts.

class EllipticCurveGroup:
    def __init__(self, curve, name=None):
        self.curve = curve
        self._cfp = curve.curve
        self.name = name or curve.name
        self.p = self._cfp.p() # the field size
        self.q = curve.order # the subgroup order, used for exponents
        self.cofactor = self._cfp.cofactor() or 1
        self.coordinate_size_bytes = size_bytes(self.p)
        self.element_size_bytes = 1 + self.coordinate_size_bytes
        self.scalar_size_bytes = size_bytes(self.q)

        self.Identity = _Element(self, ellipticcurve.INFINITY)
        self.Base = _Element(self, curve.generator)

    def order(self):
        return self.q * self.cofactor

    def subgroup_order(self):
        return self.q

    def max_exponent(self):
        return self.q - 1

    def encoded_element_size(self):
        return self.element_size_bytes

    def exponentiate_base(self, i):
        return _Element(self, self.curve.generator * (i % self.q))

    def exponentiate_element(self, e, i):
        self._check(e)
        if i < 0:
            raise ValueError("negative exponent")
        return _Element(self, e._e * i)

    def multiply_elements(self, e1, e2):
        self._check(e1)
        self._check(e2)
        return _Element(self, e1._e + e2._e)

    def encode_element(self, e):
        self._check(e)
        point = e._e
        if point == ellipticcurve.INFINITY:
            return b"\x00" * self.element_size_bytes
        prefix = 0x02 | (point.y() & 1)
        return bytes([prefix]) + number_to_bytes(point.x(), self.p)

    def decode_element(self, b):
        if not isinstance(b, (bytes, bytearray)):
            raise TypeError("elements decode from bytes")
        if len(b) != self.element_size_bytes:
            raise BadElement("element should be %d bytes, not %d"
                             % (self.element_size_bytes, len(b)))
        prefix = b[0]
        if prefix not in (0x02, 0x03):
            raise BadElement("not a compressed point")
        x = bytes_to_number(b[1:])
        if x >= self.p:
            raise BadElement("x coordinate not in the field")
        p = self.p
        alpha = (pow(x, 3, p) + self._cfp.a() * x + self._cfp.b()) % p
        try:
            beta = numbertheory.square_root_mod_prime(alpha, p)
        except numbertheory.Error:
            raise BadElement("x coordinate does not lie on the curve")
        if beta == 0 and prefix == 0x03:
            raise BadElement("no point with odd y at this x")
        if (beta & 1) != (prefix & 1):
            beta = p - beta
        # no order= here: the point is not yet known to be in the subgroup
        point = ellipticcurve.PointJacobi(self._cfp, x, beta, 1)
        return _Element(self, point)

    def validate_element(self, level, e):
        if not isinstance(e, _Element) or e._group is not self:
            return False
        point = e._e
        if point == ellipticcurve.INFINITY:
            return False
        if level >= 1 and not self._cfp.contains_point(point.x(), point.y()):
            return False
        if level >= 2 and point * self.q != ellipticcurve.INFINITY:
            return False
        return True

    def _check(self, e):
        if not isinstance(e, _Element):
            raise TypeError("expected a group element, got %r" % (e,))
        if e._group is not self:
            raise TypeError("element belongs to %s, not %s"
                            % (e._group.name, self.name))

    def __repr__(self):
        return "<EllipticCurveGroup %s>" % self.name


P256 = EllipticCurveGroup(curves.NIST256p, name="P-256")
P384 = EllipticCurveGroup(curves.NIST384p, name="P-384")
SECP256K1 = EllipticCurveGroup(curves.SECP256k1, name="secp256k1")
