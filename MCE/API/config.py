# MCE/API/config.py
from __future__ import annotations
import math
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from MCE.NMM.constants import CHALLENGE_LENGTH, SOLUTION_TTL_SEC
from MCE.CSM.challenge import DELIVERY_AUDIO, DELIVERY_VARIANTS

DEV_SECRET = "a-default-secret-for-development"

_TRUE  = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}

_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


def _env_bool(value: str, name: str) -> bool:
    v = value.strip().lower()
    if v in _TRUE:
        return True
    if v in _FALSE:
        return False
    raise ValueError(f"{name} must be a boolean, got {value!r}")


@dataclass
class ServerConfig:
    host: str = "127.0.0.1"
    port: int = 3000
    session_secret: str = DEV_SECRET
    production: bool = False           # secure cookies; refuse the dev secret
    delivery: str = DELIVERY_AUDIO     # "audio" | "notes", one per deployment
    reuse_pending: bool = True
    challenge_ttl: Optional[float] = SOLUTION_TTL_SEC   # None = never expire
    challenge_length: int = CHALLENGE_LENGTH
    trust_proxy: bool = True           # behind one reverse proxy (X-Forwarded-*)
    static_dir: Optional[str] = None
    log_level: str = "INFO"

    def __post_init__(self):
        if self.delivery not in DELIVERY_VARIANTS:
            raise ValueError(f"delivery must be one of {DELIVERY_VARIANTS}, got {self.delivery!r}")
        if self.challenge_length <= 0:
            raise ValueError(f"challenge_length must be positive, got {self.challenge_length!r}")
        if self.challenge_ttl is not None and not (
            math.isfinite(self.challenge_ttl) and self.challenge_ttl > 0
        ):
            raise ValueError(f"challenge_ttl must be positive and finite, got {self.challenge_ttl!r}")
        self.log_level = str(self.log_level).upper()
        if self.log_level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {_LOG_LEVELS}, got {self.log_level!r}")
        if self.production and self.session_secret == DEV_SECRET:
            raise ValueError("SESSION_SECRET must be set in production")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ServerConfig":
        env = os.environ if environ is None else environ
        cfg = {}
        if "HOST" in env:
            cfg["host"] = env["HOST"]
        if "PORT" in env:
            cfg["port"] = int(env["PORT"])
        if "SESSION_SECRET" in env:
            cfg["session_secret"] = env["SESSION_SECRET"]
        if "MCE_ENV" in env:
            cfg["production"] = env["MCE_ENV"].strip().lower() == "production"
        if "MCE_DELIVERY" in env:
            cfg["delivery"] = env["MCE_DELIVERY"].strip().lower()
        if "MCE_REUSE_PENDING" in env:
            cfg["reuse_pending"] = _env_bool(env["MCE_REUSE_PENDING"], "MCE_REUSE_PENDING")
        if "MCE_CHALLENGE_TTL" in env:
            ttl = float(env["MCE_CHALLENGE_TTL"])
            # 0 disables expiry; anything else is validated in __post_init__
            cfg["challenge_ttl"] = None if ttl == 0 else ttl
        if "MCE_TRUST_PROXY" in env:
            cfg["trust_proxy"] = _env_bool(env["MCE_TRUST_PROXY"], "MCE_TRUST_PROXY")
        if env.get("MCE_STATIC_DIR"):
            cfg["static_dir"] = env["MCE_STATIC_DIR"]
        if "MCE_LOG_LEVEL" in env:
            cfg["log_level"] = env["MCE_LOG_LEVEL"].upper()
        return cls(**cfg)
