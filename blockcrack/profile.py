"""
Profile cookie codec:  email=foo@bar.com&uid=1234&role=user

sanitize() only removes '&' and '=' from the email. It stops delimiter
injection but does nothing against block cut-and-paste.
"""

from typing import NamedTuple

from .primitive import random_int

FIELDS = ("email", "uid", "role")
PAIR_SEPARATOR = "&"
KEY_SEPARATOR = "="


class Profile(NamedTuple):
    email: str = ""
    uid: str = ""
    role: str = "user"


def sanitize(value):
    return value.replace(PAIR_SEPARATOR, "").replace(KEY_SEPARATOR, "")


def encode(profile):
    """Serialize in the fixed order email, uid, role."""
    return (f"email={sanitize(profile.email)}"
            f"&uid={profile.uid}"
            f"&role={profile.role}")


def decode(encoded):
    """
    Parse key=value pairs. Unknown keys and pairs without '=' are ignored,
    the last occurrence of a key wins, missing fields keep their defaults.
    """
    fields = {}
    for pair in encoded.split(PAIR_SEPARATOR):
        key, sep, value = pair.partition(KEY_SEPARATOR)
        if sep and key in FIELDS:
            fields[key] = value
    return Profile(**fields)


def new_uid():
    return str(random_int(1000, 9999))


def profile_for(email, uid=None):
    """Encoded profile with role 'user' and a fresh uid unless one is given."""
    return encode(Profile(email=sanitize(email), uid=new_uid() if uid is None else uid))
