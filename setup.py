#!/usr/bin/env python

import timeit
from setuptools import setup, Command

cmdclass = {}

class Speed(Command):
    description = "run speed benchmarks"
    user_options = []
    boolean_options = []
    def initialize_options(self):
        pass
    def finalize_options(self):
        pass
    def run(self):
        def do(setup_statements, statement):
            t = timeit.Timer(stmt=statement,
                             setup="\n".join(setup_statements))
            # determine number so that 0.2 <= total time < 2.0
            for i in range(1, 10):
                number = 10**i
                x = t.timeit(number)
                if x >= 0.2:
                    break
            return x / number

        def abbrev(t):
            if t > 1.0:
                return "%.3fs" % t
            if t > 1e-3:
                return "%.1fms" % (t*1e3)
            return "%.1fus" % (t*1e6)

        for params in ["ParamsP256", "ParamsP384", "ParamsSECP256K1",
                       "ParamsI1024", "ParamsI2048", "ParamsI3072"]:
            S1 = ("from fhmqv import FHMQV_Initiator, FHMQV_Responder, %s"
                  % params)
            S2 = "i = FHMQV_Initiator(params=%s)" % params
            S3 = "r = FHMQV_Responder(params=%s)" % params
            S4 = "a = i.generate_static_private_key()"
            S5 = ("B = r.generate_static_public_key("
                  "r.generate_static_private_key())")
            S6 = ("Y = r.extract_ephemeral_public_key("
                  "r.generate_ephemeral_private_key())")
            S7 = "x = i.generate_ephemeral_private_key()"
            S8 = "k = i.agree(a, x, B, Y)"

            agree = do([S1, S2, S3, S4, S5, S6, S7], S8)
            ephemeral = do([S1, S2], "i.generate_ephemeral_private_key()")
            from fhmqv import FHMQV_Initiator
            from fhmqv import params as all_params
            i = FHMQV_Initiator(params=getattr(all_params, params))
            print("%-15s: pubkey=%3d, agree=%6s, ephemeral=%6s"
                  % (params, i.static_public_key_length(),
                     abbrev(agree), abbrev(ephemeral)))
cmdclass["speed"] = Speed

setup(name="fhmqv",
      version="0.1.0",
      description="FHMQV authenticated key agreement (pure python)",
      package_dir={"": "src"},
      packages=["fhmqv", "fhmqv.test"],
      license="MIT",
      cmdclass=cmdclass,
      classifiers=[
          "Intended Audience :: Developers",
          "License :: OSI Approved :: MIT License",
          "Programming Language :: Python",
          "Programming Language :: Python :: 3",
          "Topic :: Security :: Cryptography",
          ],
      python_requires=">=3.6",
      install_requires=["hkdf", "ecdsa>=0.16"],
      extras_require={"test": ["pytest"]},
      )
