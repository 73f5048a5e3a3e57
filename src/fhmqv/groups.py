from .errors import BadElement
from .util import size_bits, size_bytes, bytes_to_number, number_to_bytes

"""Interface specification for an AlgebraicGroup.

FHMQV runs over any cyclic group where discrete logs are hard. We write the
group operation multiplicatively, the way the FHMQV paper does: elements are
multiplied together, and raised to integer powers ('exponents').

* the group has an order 'p' (the number of elements in the whole group)
* inside it there is a prime-order subgroup of order 'q', generated by the
  distinguished element 'Base' (the generator, or 'base point' in ECC groups)
* all protocol exponents live in [0,q-1], and all exponent arithmetic is
  done mod q
* 'Identity' is the neutral element: e*Identity = e, and Base^q = Identity

Elements are opaque. You only ever get one by exponentiating, multiplying,
or decoding bytes received from the other side. Decoding checks the
encoding, and nothing more. Whether the element is safe to use is a
separate question, answered by validate_element() at one of these levels:

* level 0: the encoding was well-formed (anything decode_element returns)
* level 1: the element is a member of the whole group, and not the identity
* level 2 and up: the element is also in the order-q subgroup. FHMQV asks
  for level 3.

Every group provides:

    g = I2048 # or P256, from fhmqv.ec_groups

    p = g.order()
    q = g.subgroup_order()
    m = g.max_exponent()            # q-1
    n = g.encoded_element_size()

    e = g.exponentiate_base(x)      # Base^x
    e = g.exponentiate_element(e, x)
    e = g.multiply_elements(e1, e2)
    b = g.encode_element(e)
    e = g.decode_element(b)         # raises BadElement
    ok = g.validate_element(3, e)

Elements also carry .multiply(), .exponentiate() and .to_bytes() shortcuts,
and equality tests work: e1 == e2, e1 != e2.
"""

class _Element:
    def __init__(self, group, e):
        self._group = group
        self._e = e

    def multiply(self, other):
        return self._group.multiply_elements(self, other)
    def exponentiate(self, i):
        return self._group.exponentiate_element(self, i)

    def to_bytes(self):
        return self._group.encode_element(self)

    def __eq__(self, other):
        if not isinstance(other, _Element):
            return NotImplemented
        return (other._group is self._group and
                self.to_bytes() == other.to_bytes())

    def __hash__(self):
        return hash(self.to_bytes())

    def __repr__(self):
        return "<Element %s of %s>" % (self.to_bytes().hex()[:16],
                                       self._group.name)

class IntegerGroup:
    def __init__(self, p, q, g, name=None):
        # these are the public system parameters
        self.p = p # the field size
        self.q = q # the subgroup order, used for exponents
        self.g = g # generator of the subgroup
        self.name = name or "I%d" % size_bits(p)
        self.element_size_bits = size_bits(self.p)
        self.element_size_bytes = size_bytes(self.p)
        self.scalar_size_bytes = size_bytes(self.q)

        # double-check that the generator has the right order
        assert (self.p - 1) % self.q == 0
        assert 1 < self.g < self.p
        assert pow(self.g, self.q, self.p) == 1

        self.Identity = _Element(self, 1)
        self.Base = _Element(self, self.g)

    def order(self):
        # Zp* has p-1 elements
        return self.p - 1

    def subgroup_order(self):
        return self.q

    def max_exponent(self):
        return self.q - 1

    def encoded_element_size(self):
        return self.element_size_bytes

    def exponentiate_base(self, i):
        return _Element(self, pow(self.g, i % self.q, self.p))

    def exponentiate_element(self, e, i):
        # no reduction mod q: e is not known to be in the subgroup
        self._check(e)
        if i < 0:
            raise ValueError("negative exponent")
        return _Element(self, pow(e._e, i, self.p))

    def multiply_elements(self, e1, e2):
        self._check(e1)
        self._check(e2)
        return _Element(self, (e1._e * e2._e) % self.p)

    def encode_element(self, e):
        # for sending to other side, and hashing into transcript
        self._check(e)
        return number_to_bytes(e._e, self.p)

    def decode_element(self, b):
        # for receiving from other side. This only checks the encoding:
        # use validate_element() before trusting the result.
        if not isinstance(b, (bytes, bytearray)):
            raise TypeError("elements decode from bytes")
        if len(b) != self.element_size_bytes:
            raise BadElement("element should be %d bytes, not %d"
                             % (self.element_size_bytes, len(b)))
        i = bytes_to_number(b)
        if i <= 0 or i >= self.p: # Zp* excludes 0
            raise BadElement("alleged element not in the field")
        return _Element(self, i)

    def validate_element(self, level, e):
        if not isinstance(e, _Element) or e._group is not self:
            return False
        i = e._e
        if not 0 < i < self.p:
            return False
        if level >= 1 and i == 1:
            return False
        if level >= 2 and pow(i, self.q, self.p) != 1:
            return False
        return True

    def _check(self, e):
        if not isinstance(e, _Element):
            raise TypeError("expected a group element, got %r" % (e,))
        if e._group is not self:
            raise TypeError("element belongs to %s, not %s"
                            % (e._group.name, self.name))

    def __repr__(self):
        return "<IntegerGroup %s>" % self.name


# These groups come from the NIST DSA example document, the same ones the
# J-PAKE demo code recommends:
# http://csrc.nist.gov/groups/ST/toolkit/documents/Examples/DSA2_All.pdf

# L=1024, N=160
I1024 = IntegerGroup(
    p=0xE0A67598CD1B763BC98C8ABB333E5DDA0CD3AA0E5E1FB5BA8A7B4EABC10BA338FAE06DD4B90FDA70D7CF0CB0C638BE3341BEC0AF8A7330A3307DED2299A0EE606DF035177A239C34A912C202AA5F83B9C4A7CF0235B5316BFC6EFB9A248411258B30B839AF172440F32563056CB67A861158DDD90E6A894C72A5BBEF9E286C6B,
    q=0xE950511EAB424B9A19A2AEB4E159B7844C589C4F,
    g=0xD29D5121B0423C2769AB21843E5A3240FF19CACC792264E3BB6BE4F78EDD1B15C4DFF7F1D905431F0AB16790E1F773B5CE01C804E509066A9919F5195F4ABC58189FD9FF987389CB5BEDF21B4DAB4F8B76A055FFE2770988FE2EC2DE11AD92219F0B351869AC24DA3D7BA87011A701CE8EE7BFE49486ED4527B7186CA4610A75,
    name="I1024",
    )

# L=2048, N=224
I2048 = IntegerGroup(
    p=0xC196BA05AC29E1F9C3C72D56DFFC6154A033F1477AC88EC37F09BE6C5BB95F51C296DD20D1A28A067CCC4D4316A4BD1DCA55ED1066D438C35AEBAABF57E7DAE428782A95ECA1C143DB701FD48533A3C18F0FE23557EA7AE619ECACC7E0B51652A8776D02A425567DED36EABD90CA33A1E8D988F0BBB92D02D1D20290113BB562CE1FC856EEB7CDD92D33EEA6F410859B179E7E789A8F75F645FAE2E136D252BFFAFF89528945C1ABE705A38DBC2D364AADE99BE0D0AAD82E5320121496DC65B3930E38047294FF877831A16D5228418DE8AB275D7D75651CEFED65F78AFC3EA7FE4D79B35F62A0402A1117599ADAC7B269A59F353CF450E6982D3B1702D9CA83,
    q=0x90EAF4D1AF0708B1B612FF35E0A2997EB9E9D263C9CE659528945C0D,
    g=0xA59A749A11242C58C894E9E5A91804E8FA0AC64B56288F8D47D51B1EDC4D65444FECA0111D78F35FC9FDD4CB1F1B79A3BA9CBEE83A3F811012503C8117F98E5048B089E387AF6949BF8784EBD9EF45876F2E6A5A495BE64B6E770409494B7FEE1DBB1E4B2BC2A53D4F893D418B7159592E4FFFDF6969E91D770DAEBD0B5CB14C00AD68EC7DC1E5745EA55C706C4A1C5C88964E34D09DEB753AD418C1AD0F4FDFD049A955E5D78491C0B7A2F1575A008CCD727AB376DB6E695515B05BD412F5B8C2F4C77EE10DA48ABD53F5DD498927EE7B692BBBCDA2FB23A516C5B4533D73980B2A3B60E384ED200AE21B40D273651AD6060C13D97FD69AA13C5611A51B9085,
    name="I2048",
    )

# L=3072, N=256
I3072 = IntegerGroup(
    p=0x90066455B5CFC38F9CAA4A48B4281F292C260FEEF01FD61037E56258A7795A1C7AD46076982CE6BB956936C6AB4DCFE05E6784586940CA544B9B2140E1EB523F009D20A7E7880E4E5BFA690F1B9004A27811CD9904AF70420EEFD6EA11EF7DA129F58835FF56B89FAA637BC9AC2EFAAB903402229F491D8D3485261CD068699B6BA58A1DDBBEF6DB51E8FE34E8A78E542D7BA351C21EA8D8F1D29F5D5D15939487E27F4416B0CA632C59EFD1B1EB66511A5A0FBF615B766C5862D0BD8A3FE7A0E0DA0FB2FE1FCB19E8F9996A8EA0FCCDE538175238FC8B0EE6F29AF7F642773EBE8CD5402415A01451A840476B2FCEB0E388D30D4B376C37FE401C2A2C2F941DAD179C540C1C8CE030D460C4D983BE9AB0B20F69144C1AE13F9383EA1C08504FB0BF321503EFE43488310DD8DC77EC5B8349B8BFE97C2C560EA878DE87C11E3D597F1FEA742D73EEC7F37BE43949EF1A0D15C3F3E3FC0A8335617055AC91328EC22B50FC15B941D3D1624CD88BC25F3E941FDDC6200689581BFEC416B4B2CB73,
    q=0xCFA0478A54717B08CE64805B76E5B14249A77A4838469DF7F7DC987EFCCFB11D,
    g=0x5E5CBA992E0A680D885EB903AEA78E4A45A469103D448EDE3B7ACCC54D521E37F84A4BDD5B06B0970CC2D2BBB715F7B82846F9A0C393914C792E6A923E2117AB805276A975AADB5261D91673EA9AAFFEECBFA6183DFCB5D3B7332AA19275AFA1F8EC0B60FB6F66CC23AE4870791D5982AAD1AA9485FD8F4A60126FEB2CF05DB8A7F0F09B3397F3937F2E90B9E5B9C9B6EFEF642BC48351C46FB171B9BFA9EF17A961CE96C7E7A7CC3D3D03DFAD1078BA21DA425198F07D2481622BCE45969D9C4D6063D72AB7A0F08B2F49A7CC6AF335E08C4720E31476B67299E231F8BD90B39AC3AE3BE0C6B6CACEF8289A2E2873D58E51E029CAFBD55E6841489AB66B5B4B9BA6E2F784660896AFF387D92844CCB8B69475496DE19DA2E58259B090489AC8E62363CDF82CFD8EF2A427ABCD65750B506F56DDE3B988567A88126B914D7828E2B63A6D7ED0747EC59E0E0A23CE7D8A74C1D2C2A7AFB6A29799620F00E11C33787F7DED3B30E1A22D09F1FBDA1ABBBFBF25CAE05A13F812E34563F99410E73B,
    name="I3072",
    )
