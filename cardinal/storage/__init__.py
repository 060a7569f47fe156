"""Storage - in-memory signup log"""

from cardinal.storage.signups import SignupEntry, SignupLog, get_signup_log

__all__ = ["SignupEntry", "SignupLog", "get_signup_log"]
