#coding: utf-8

def splitonce(string, sep):
    """Split string at the first sep.

    Return (head, tail) or (string, None) when sep is absent."""
    pos = string.find(sep)
    if pos < 0:
        return string, None
    return string[:pos], string[pos+len(sep):]

def splitonceany(string, seps):
    """Split string at the first character that belongs to seps.

    Return (head, sep, tail) where sep is the matching character,
    or (string, '', '') when none of seps occurs."""
    for pos, char in enumerate(string):
        if char in seps:
            return string[:pos], char, string[pos+1:]
    return string, '', ''

def findmatchingbracket(string, start=0):
    """Index of the ']' closing the '[' found at string[start], -1 if unterminated."""
    if not string.startswith('[', start):
        return -1
    return string.find(']', start+1)
