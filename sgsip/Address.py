#coding: utf-8

import collections
import enum
import ipaddress
import logging
log = logging.getLogger('sgsip.Address')

from . import SIPBNF
from . import Utils
from .Error import UnknownProtocol, InvalidAddress, InvalidPort

DEFAULT_PORT = 5060
DEFAULT_PROTO = 'udp'


class AddrType(enum.IntEnum):
    NONE = 0
    IPV4 = 1
    IPV6 = 2
    HOST = 3

class Proto(enum.IntEnum):
    NONE = 0
    UDP = 1
    TCP = 2
    TLS = 3
    SCTP = 4
    WS = 5
    WSS = 6

# canonical spelling -> id. Only the canonical and the all-uppercase
# spellings are accepted.
PROTOCOLS = collections.OrderedDict((
    ('udp',  Proto.UDP),
    ('tcp',  Proto.TCP),
    ('tls',  Proto.TLS),
    ('sctp', Proto.SCTP),
    ('ws',   Proto.WS),
    ('wss',  Proto.WSS),
))


def classifyaddress(token):
    """Quick detection of the kind of a host token.

    Anything that is not an IP literal is a HOST, scoped IPv6 literals
    included. For an IP literal the first '.' or ':' decides between
    IPV4 and IPV6."""
    if '%' in token:
        return AddrType.HOST
    try:
        ipaddress.ip_address(token)
    except ValueError:
        return AddrType.HOST
    for char in token:
        if char == '.':
            return AddrType.IPV4
        if char == ':':
            return AddrType.IPV6
    return AddrType.NONE

def lookupprotocol(token):
    canonical = token.lower()
    if canonical in PROTOCOLS and token in (canonical, canonical.upper()):
        return canonical, PROTOCOLS[canonical]
    return None

def resolveprotocol(token):
    """Return (canonical, Proto) for a transport token like 'tcp' or 'TCP'."""
    resolved = lookupprotocol(token)
    if resolved is None:
        log.logandraise(UnknownProtocol(token, "unknown transport protocol"), logging.DEBUG)
    return resolved

def parseportnumber(value, portstr):
    try:
        return SIPBNF.parseport(portstr)
    except SIPBNF.ParseException as e:
        log.logandraise(InvalidPort(value, str(e)), logging.DEBUG)


class SocketAddress(collections.namedtuple('SocketAddress', 'val proto protoid addr atype port portno')):
    __slots__ = ()
    def __str__(self):
        return self.val


def parsesocketaddress(sockstr):
    """Decode '[proto:]host[:port]' into a SocketAddress.

    host is a name, an IPv4 literal or a bracketed IPv6 literal.
    Missing proto and port default to udp and 5060."""
    proto, protoid = DEFAULT_PROTO, Proto.UDP
    port, portno = str(DEFAULT_PORT), DEFAULT_PORT

    if len(sockstr) > 1 and sockstr.startswith('[') and sockstr.endswith(']'):
        # bare IPv6 reference
        addr = sockstr
        atype = classifyaddress(addr[1:-1])
        if atype != AddrType.IPV6:
            log.logandraise(InvalidAddress(sockstr, "not an IPv6 reference"), logging.DEBUG)
        return _socketaddress(sockstr, proto, protoid, addr, atype, port, portno)

    head, rest = Utils.splitonce(sockstr, ':')
    if rest is None:
        # host only
        addr = sockstr
        if not addr:
            log.logandraise(InvalidAddress(sockstr, "empty socket address"), logging.DEBUG)
        return _socketaddress(sockstr, proto, protoid, addr, classifyaddress(addr), port, portno)

    resolved = lookupprotocol(head)
    if resolved is not None:
        proto, protoid = resolved
        addrport = rest
    else:
        # first token is not a protocol: the whole string is addr:port
        addrport = sockstr

    if addrport.startswith('['):
        close = Utils.findmatchingbracket(addrport)
        if close < 0:
            log.logandraise(InvalidAddress(sockstr, "unterminated IPv6 reference"), logging.DEBUG)
        addr = addrport[:close+1]
        tail = addrport[close+1:]
        if tail:
            if not tail.startswith(':'):
                log.logandraise(InvalidAddress(sockstr, "unexpected characters after IPv6 reference"), logging.DEBUG)
            port = tail[1:]
            portno = parseportnumber(sockstr, port)
        atype = classifyaddress(addr[1:-1])
        if atype != AddrType.IPV6:
            log.logandraise(InvalidAddress(sockstr, "not an IPv6 reference"), logging.DEBUG)
    else:
        addr, portstr = Utils.splitonce(addrport, ':')
        if portstr is not None:
            port = portstr
            portno = parseportnumber(sockstr, port)
        atype = classifyaddress(addr)

    return _socketaddress(sockstr, proto, protoid, addr, atype, port, portno)

def _socketaddress(sockstr, proto, protoid, addr, atype, port, portno):
    sockaddr = SocketAddress(val=sockstr, proto=proto, protoid=protoid, addr=addr, atype=atype, port=port, portno=portno)
    log.debug("{!r} --> {!r}".format(sockstr, sockaddr))
    return sockaddr
