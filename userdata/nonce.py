import hashlib
import hmac
import math
import time


class InvalidNonce(Exception):
    """Raised when a request carries a missing, forged or expired nonce."""
    pass


def _tick(lifetime, now=None):
    # A nonce stays valid for two half-lifetime ticks.
    now = time.time() if now is None else now
    return math.ceil(now / (lifetime / 2))


def _digest(secret, tick, action):
    message = f"{tick}|{action}".encode("utf-8")
    return hmac.new(secret.encode("utf-8"), message, hashlib.sha256).hexdigest()[-12:-2]


def create_nonce(secret, action, lifetime=86400, now=None):
    """Returns a 10 character token bound to ``action`` and the current tick."""
    return _digest(secret, _tick(lifetime, now), action)


def verify_nonce(secret, nonce, action, lifetime=86400, now=None):
    """
    Checks ``nonce`` against ``action``.

    Returns 1 if it was generated in the current tick, 2 if it was generated in
    the previous one, and False otherwise.
    """
    if not nonce:
        return False
    tick = _tick(lifetime, now)
    if hmac.compare_digest(_digest(secret, tick, action), nonce):
        return 1
    if hmac.compare_digest(_digest(secret, tick - 1, action), nonce):
        return 2
    return False


def check_nonce(secret, nonce, action, lifetime=86400):
    """Like :func:`verify_nonce` but raises :class:`InvalidNonce` on failure."""
    result = verify_nonce(secret, nonce, action, lifetime)
    if not result:
        raise InvalidNonce(f"Invalid nonce for action '{action}'")
    return result
