#coding: utf-8

class SGSIPError(Exception):
    """Base class of every decoding failure.

    value is the string that could not be decoded, msg tells why."""
    def __init__(self, value, msg):
        super().__init__(value, msg)
        self.value = value
        self.msg = msg
    def __str__(self):
        return "{}: {!r}".format(self.msg, self.value)

class UnknownScheme(SGSIPError):
    pass

class UnknownProtocol(SGSIPError):
    pass

class EmptyUser(SGSIPError):
    pass

class InvalidAddress(SGSIPError):
    pass

class InvalidPort(SGSIPError):
    pass

class MalformedUri(SGSIPError):
    pass
