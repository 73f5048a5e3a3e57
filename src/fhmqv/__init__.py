
from .fhmqv import (FHMQV, FHMQV_Initiator, FHMQV_Responder, AgreementResult,
                    RoleInitiator, RoleResponder)
from .errors import FHMQVError, BadElement, UnknownRole, WrongGroupError
from .keys import KeyPairGenerator, EphemeralKeyPair, StaticKeyPair
from .kdf import expand_agreed_value
from .params import (Params, DefaultParams, ParamsI1024, ParamsI2048,
                     ParamsI3072, ParamsP256, ParamsP384, ParamsSECP256K1)
_hush_pyflakes = [FHMQV, FHMQV_Initiator, FHMQV_Responder, AgreementResult,
                  RoleInitiator, RoleResponder,
                  FHMQVError, BadElement, UnknownRole, WrongGroupError,
                  KeyPairGenerator, EphemeralKeyPair, StaticKeyPair,
                  expand_agreed_value,
                  Params, DefaultParams, ParamsI1024, ParamsI2048,
                  ParamsI3072, ParamsP256, ParamsP384, ParamsSECP256K1]
del _hush_pyflakes

__version__ = "0.1.0"
