import unittest
from multiprocessing.dummy import Pool as ThreadPool
from fhmqv import fhmqv
from fhmqv.errors import UnknownRole, WrongGroupError
from fhmqv.fhmqv import (FHMQV, FHMQV_Initiator, FHMQV_Responder,
                         RoleInitiator, RoleResponder)
from fhmqv.params import (DefaultParams, ParamsI1024, ParamsI2048,
                          ParamsI3072, ParamsP256, ParamsP384,
                          ParamsSECP256K1)
from fhmqv.util import number_to_bytes
from .common import PRG, flip

ALL_PARAMS = [ParamsI1024, ParamsI2048, ParamsI3072,
              ParamsP256, ParamsP384, ParamsSECP256K1]

class Party:
    def __init__(self, engine):
        self.engine = engine
        self.static_private = engine.generate_static_private_key()
        self.static_public = engine.generate_static_public_key(
            self.static_private)
        self.ephemeral = engine.generate_ephemeral_private_key()
        self.ephemeral_public = engine.extract_ephemeral_public_key(
            self.ephemeral)

    def agree(self, other, **kwargs):
        return self.engine.agree(self.static_private, self.ephemeral,
                                 other.static_public, other.ephemeral_public,
                                 **kwargs)

def make_pair(params=DefaultParams, seed_i=b"I", seed_r=b"R"):
    i = Party(FHMQV_Initiator(params, entropy_f=PRG(seed_i)))
    r = Party(FHMQV_Responder(params, entropy_f=PRG(seed_r)))
    return i, r

class Basic(unittest.TestCase):
    def test_success(self):
        i, r = make_pair()
        kI, kR = i.agree(r), r.agree(i)
        self.assertTrue(kI.success)
        self.assertTrue(kR.success)
        self.assertEqual(kI.agreed_value.hex(), kR.agreed_value.hex())
        self.assertEqual(len(kI.agreed_value),
                         i.engine.agreed_value_length())

    def test_all_params(self):
        for p in ALL_PARAMS:
            i, r = make_pair(p)
            kI, kR = i.agree(r), r.agree(i)
            self.assertTrue(kI.success, p)
            self.assertEqual(kI.agreed_value, kR.agreed_value, p)
            self.assertEqual(len(kI.agreed_value), p.hasher.digest_size)

    def test_default_is_p256(self):
        self.assertIs(FHMQV_Initiator().params, ParamsP256)
        self.assertEqual(FHMQV_Responder().agreed_value_length(), 32)
        self.assertEqual(
            FHMQV_Initiator(ParamsP384).agreed_value_length(), 48)

    def test_lengths(self):
        e = FHMQV_Initiator(ParamsI1024)
        self.assertEqual(e.static_private_key_length(), 20)
        self.assertEqual(e.static_public_key_length(), 128)
        self.assertEqual(e.ephemeral_private_key_length(), 148)
        self.assertEqual(e.ephemeral_public_key_length(), 128)
        e = FHMQV_Responder(ParamsP256)
        self.assertEqual(e.static_private_key_length(), 32)
        self.assertEqual(e.static_public_key_length(), 33)
        self.assertEqual(e.ephemeral_private_key_length(), 65)
        self.assertEqual(e.ephemeral_public_key_length(), 33)

    def test_deterministic(self):
        i, r = make_pair()
        k1 = i.agree(r)
        k2 = i.agree(r)
        self.assertEqual(k1, k2)

    def test_different_sessions(self):
        i1, r1 = make_pair(seed_i=b"I1", seed_r=b"R1")
        i2, r2 = make_pair(seed_i=b"I2", seed_r=b"R2")
        self.assertNotEqual(i1.agree(r1).agreed_value,
                            i2.agree(r2).agreed_value)

    def test_new_ephemeral_new_key(self):
        # same static keys, fresh ephemerals
        i, r = make_pair()
        k1 = i.agree(r).agreed_value
        i.ephemeral = i.engine.generate_ephemeral_private_key()
        i.ephemeral_public = i.engine.extract_ephemeral_public_key(
            i.ephemeral)
        kI, kR = i.agree(r), r.agree(i)
        self.assertEqual(kI.agreed_value, kR.agreed_value)
        self.assertNotEqual(kI.agreed_value, k1)

    def test_packed_ephemeral(self):
        i, r = make_pair(ParamsI2048)
        expected = i.agree(r)
        packed = i.engine.agree(i.static_private, i.ephemeral.to_bytes(),
                                r.static_public, r.ephemeral_public)
        self.assertEqual(packed, expected)

    def test_factory(self):
        self.assertIsInstance(FHMQV(RoleInitiator), FHMQV_Initiator)
        self.assertIsInstance(FHMQV(RoleResponder, ParamsI1024),
                              FHMQV_Responder)
        i = Party(FHMQV(RoleInitiator, entropy_f=PRG(b"I")))
        r = Party(FHMQV(RoleResponder, entropy_f=PRG(b"R")))
        self.assertEqual(i.agree(r).agreed_value, r.agree(i).agreed_value)

    def test_result(self):
        i, r = make_pair()
        ok = i.agree(r)
        self.assertTrue(ok)
        self.assertFalse(fhmqv.FAILED)
        self.assertIsNone(fhmqv.FAILED.agreed_value)
        success, agreed_value = ok
        self.assertTrue(success)
        self.assertEqual(agreed_value, ok.agreed_value)

class Roles(unittest.TestCase):
    def test_both_initiators(self):
        i, r = make_pair()
        good = i.agree(r).agreed_value
        wrong = Party(FHMQV_Initiator(DefaultParams, entropy_f=PRG(b"R")))
        k1, k2 = i.agree(wrong), wrong.agree(i)
        self.assertTrue(k1.success)
        self.assertTrue(k2.success)
        # i computes exactly what it would against a real Responder, but
        # the other side lays out the transcript the other way round
        self.assertEqual(k1.agreed_value, good)
        self.assertNotEqual(k2.agreed_value, good)

    def test_both_responders(self):
        i, r = make_pair()
        good = r.agree(i).agreed_value
        wrong = Party(FHMQV_Responder(DefaultParams, entropy_f=PRG(b"I")))
        k1, k2 = r.agree(wrong), wrong.agree(r)
        self.assertEqual(k1.agreed_value, good)
        self.assertNotEqual(k2.agreed_value, good)

    def test_unknown_role(self):
        self.assertRaises(UnknownRole, FHMQV, b"X")
        self.assertRaises(UnknownRole, FHMQV, "initiator")
        self.assertRaises(UnknownRole, fhmqv._FHMQV_Base)

class Tampering(unittest.TestCase):
    def check_tampered(self, params, index):
        i, r = make_pair(params)
        good = i.agree(r).agreed_value
        for field in ["static_public", "ephemeral_public"]:
            # what the Initiator receives from the Responder
            setattr(r, field, flip(getattr(r, field), index))
            res = i.agree(r)
            self.assertTrue(not res.success or res.agreed_value != good,
                            (params, field, index))
            i, r = make_pair(params)
            # what the Responder receives from the Initiator
            setattr(i, field, flip(getattr(i, field), index))
            res = r.agree(i)
            self.assertTrue(not res.success or res.agreed_value != good,
                            (params, field, index))
            i, r = make_pair(params)

    def test_tamper(self):
        for p in [ParamsI1024, ParamsP256, ParamsSECP256K1]:
            for index in [0, 1, -1]:
                self.check_tampered(p, index)

    def test_swapped_static_keys(self):
        i, r = make_pair()
        good = i.agree(r).agreed_value
        r.static_public, i.static_public = i.static_public, r.static_public
        self.assertNotEqual(i.agree(r).agreed_value, good)

    def test_wrong_length_public_keys(self):
        i, r = make_pair()
        r.ephemeral_public = r.ephemeral_public[:-1]
        self.assertFalse(i.agree(r))
        i, r = make_pair()
        r.static_public = r.static_public + b"\x00"
        self.assertFalse(i.agree(r).success)

    def test_identity_rejected(self):
        i, r = make_pair(ParamsI1024)
        r.ephemeral_public = number_to_bytes(1, ParamsI1024.group.p)
        self.assertEqual(i.agree(r), fhmqv.FAILED)
        i, r = make_pair(ParamsP256)
        r.static_public = ParamsP256.group.Identity.to_bytes()
        self.assertEqual(i.agree(r, validate_static_other_public_key=False),
                         fhmqv.FAILED)

    def test_rejection_is_logged(self):
        i, r = make_pair(ParamsI1024)
        r.ephemeral_public = number_to_bytes(1, ParamsI1024.group.p)
        with self.assertLogs("fhmqv.fhmqv", level="DEBUG") as cm:
            self.assertFalse(i.agree(r))
        self.assertIn("ephemeral", cm.output[0])
        # no key material in the log
        self.assertNotIn(r.ephemeral_public.hex(), cm.output[0])

class ValidationLevels(unittest.TestCase):
    def setUp(self):
        g = ParamsI1024.group
        # in Zp*, so it passes level 1, but it has order 2, so not level 3
        self.small_order = number_to_bytes(g.p - 1, g.p)

    def test_static_toggle(self):
        i, r = make_pair(ParamsI1024)
        r.static_public = self.small_order
        res = i.agree(r, validate_static_other_public_key=False)
        self.assertTrue(res.success)
        self.assertEqual(len(res.agreed_value), 32)
        res = i.agree(r, validate_static_other_public_key=True)
        self.assertFalse(res.success)
        self.assertIsNone(res.agreed_value)
        # the default is full validation
        self.assertFalse(i.agree(r).success)

    def test_static_toggle_responder(self):
        i, r = make_pair(ParamsI1024)
        i.static_public = self.small_order
        self.assertTrue(r.agree(i, validate_static_other_public_key=False))
        self.assertFalse(r.agree(i))

    def test_ephemeral_always_validated(self):
        i, r = make_pair(ParamsI1024)
        r.ephemeral_public = self.small_order
        self.assertFalse(i.agree(r, validate_static_other_public_key=False))
        self.assertFalse(i.agree(r, validate_static_other_public_key=True))
        i.ephemeral_public = self.small_order
        self.assertFalse(r.agree(i, validate_static_other_public_key=False))

    def test_prevalidated_static_key(self):
        # skipping the static check doesn't change an honest result
        i, r = make_pair(ParamsI2048)
        full = i.agree(r)
        quick = i.agree(r, validate_static_other_public_key=False)
        self.assertEqual(full, quick)

class Errors(unittest.TestCase):
    def test_bad_private_keys(self):
        i, r = make_pair()
        self.assertRaises(ValueError, i.engine.agree, i.static_private[:-1],
                          i.ephemeral, r.static_public, r.ephemeral_public)
        self.assertRaises(ValueError, i.engine.agree, i.static_private,
                          i.ephemeral.to_bytes()[:-1], r.static_public,
                          r.ephemeral_public)

    def test_public_keys_must_be_bytes(self):
        i, r = make_pair()
        self.assertRaises(TypeError, i.engine.agree, i.static_private,
                          i.ephemeral, 33, r.ephemeral_public)
        self.assertRaises(TypeError, i.engine.agree, i.static_private,
                          i.ephemeral, r.static_public, None)

    def test_wrong_params(self):
        i, r = make_pair(ParamsP256)
        other = FHMQV_Initiator(ParamsSECP256K1)
        eph = other.generate_ephemeral_private_key()
        self.assertRaises(WrongGroupError, i.engine.agree, i.static_private,
                          eph, r.static_public, r.ephemeral_public)

class OtherEntropy(unittest.TestCase):
    def test_entropy(self):
        i1, r1 = make_pair(seed_i=b"seed-I", seed_r=b"seed-R")
        k1 = i1.agree(r1)
        # run it again with the same entropy streams: everything should be
        # identical
        i2, r2 = make_pair(seed_i=b"seed-I", seed_r=b"seed-R")
        k2 = r2.agree(i2)
        self.assertEqual(i1.static_public, i2.static_public)
        self.assertEqual(r1.ephemeral_public, r2.ephemeral_public)
        self.assertEqual(k1, k2)

class Threads(unittest.TestCase):
    def test_thread_safety(self):
        # one engine per role, shared by every agreement
        initiator = FHMQV_Initiator(ParamsI1024)
        responder = FHMQV_Responder(ParamsI1024)

        def _assert_equality(i, r):
            kI = i.agree(r)
            kR = r.agree(i)
            self.assertTrue(kI.success)
            self.assertEqual(kI.agreed_value.hex(), kR.agreed_value.hex())

        pool = ThreadPool(4)
        try:
            tasks = []
            for n in range(32):
                i, r = Party(initiator), Party(responder)
                tasks.append(pool.apply_async(_assert_equality, (i, r)))
            for task in tasks:
                task.get()
        finally:
            pool.terminate()

if __name__ == "__main__":
    unittest.main()
