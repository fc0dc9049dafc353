#coding: utf-8

import collections
import enum
import logging
log = logging.getLogger('sgsip.URI')

from . import SIPBNF
from . import Utils
from .Address import AddrType, Proto, SocketAddress, DEFAULT_PORT, DEFAULT_PROTO, classifyaddress, lookupprotocol
from .Error import UnknownScheme, UnknownProtocol, EmptyUser, InvalidAddress, InvalidPort, MalformedUri


class Schema(enum.IntEnum):
    NONE = 0
    SIP = 1
    SIPS = 2
    TEL = 3

SCHEMAS = collections.OrderedDict((
    ('sip',  Schema.SIP),
    ('sips', Schema.SIPS),
    ('tel',  Schema.TEL),
))


def resolvescheme(token):
    """Return (canonical, Schema) for a scheme token like 'sip' or 'SIP'."""
    canonical = token.lower()
    if canonical not in SCHEMAS or token not in (canonical, canonical.upper()):
        log.logandraise(UnknownScheme(token, "unknown URI scheme"), logging.DEBUG)
    return canonical, SCHEMAS[canonical]


class Uri(collections.namedtuple('Uri', 'val schema schemaid user uparams addr atype port portno params proto protoid')):
    __slots__ = ()
    def __str__(self):
        return self.val
    def socketaddress(self):
        """Transport address to reach for this URI, as proto:addr:port."""
        val = "{}:{}:{}".format(self.proto, self.addr, self.port)
        return SocketAddress(val=val, proto=self.proto, protoid=self.protoid, addr=self.addr, atype=self.atype, port=self.port, portno=self.portno)


def parseuri(uristr):
    """Decode 'scheme:[user@]host[:port][;params]' into a Uri.

    The user part keeps the ';' that introduces its parameters, the
    parameters themselves go to uparams. params holds the raw text that
    follows host and port. A ';transport=' parameter overrides the
    default udp protocol. The record is built only once every part has
    been checked."""
    scheme, rest = Utils.splitonce(uristr, ':')
    if rest is None:
        log.logandraise(MalformedUri(uristr, "missing ':' after scheme"), logging.DEBUG)
    schema, schemaid = resolvescheme(scheme)

    fields = dict(val=uristr, schema=schema, schemaid=schemaid, user='', uparams='', params='',
                  proto=DEFAULT_PROTO, protoid=Proto.UDP, port=str(DEFAULT_PORT), portno=DEFAULT_PORT)

    # positions are taken on the whole remainder, user part included
    atpos = rest.find('@')
    colpos = rest.find(':')
    scpos = rest.find(';')
    if atpos == 0:
        log.logandraise(EmptyUser(uristr, "empty user part"), logging.DEBUG)
    if atpos < 0 and colpos < 0 and scpos < 0:
        # no user, no port, no parameters
        return _uri(fields, addr=rest, atype=classifyaddress(rest))

    if atpos > 0:
        userpart, hostpp = rest[:atpos], rest[atpos+1:]
        uscpos = userpart.find(';')
        if uscpos == 0:
            log.logandraise(EmptyUser(uristr, "empty user part"), logging.DEBUG)
        if uscpos < 0:
            fields['user'] = userpart
        else:
            fields['user'] = userpart[:uscpos+1]
            fields['uparams'] = userpart[uscpos+1:]
    else:
        hostpp = rest

    if colpos < 0 and scpos < 0:
        # no port, no parameters
        return _uri(fields, addr=hostpp, atype=classifyaddress(hostpp))

    if hostpp.startswith('['):
        if hostpp.endswith(']'):
            # only an IPv6 reference
            return _uri(fields, addr=hostpp, atype=_classifyipv6(uristr, hostpp))
        close = Utils.findmatchingbracket(hostpp)
        if close < 0:
            log.logandraise(InvalidAddress(uristr, "unterminated IPv6 reference"), logging.DEBUG)
        addr = hostpp[:close+1]
        atype = _classifyipv6(uristr, addr)
        portparams = hostpp[close+1:]
    else:
        addr, sep, after = Utils.splitonceany(hostpp, ':;')
        atype = classifyaddress(addr)
        if not sep:
            # ':' or ';' only seen in the user part
            return _uri(fields, addr=addr, atype=atype)
        portparams = sep + after

    if portparams.startswith(':'):
        port, params = Utils.splitonce(portparams[1:], ';')
        portno = _parseport(uristr, port)
        fields['port'], fields['portno'] = port, portno
        if params is None:
            return _uri(fields, addr=addr, atype=atype)
        params = ';' + params
    elif portparams.startswith(';'):
        params = portparams
    else:
        log.logandraise(MalformedUri(uristr, "expecting ':' or ';' after host"), logging.DEBUG)

    if params:
        fields['params'] = params[1:]
        transport = SIPBNF.findtransport(params)
        if transport is not None:
            resolved = lookupprotocol(transport)
            if resolved is None:
                log.logandraise(UnknownProtocol(uristr, "unknown transport protocol {!r}".format(transport)), logging.DEBUG)
            fields['proto'], fields['protoid'] = resolved
    return _uri(fields, addr=addr, atype=atype)

def _parseport(uristr, port):
    try:
        portno = SIPBNF.parseport(port)
    except SIPBNF.ParseException as e:
        log.logandraise(InvalidPort(uristr, str(e)), logging.DEBUG)
    if portno <= 0:
        log.logandraise(InvalidPort(uristr, "port must be positive"), logging.DEBUG)
    return portno

def _classifyipv6(uristr, reference):
    atype = classifyaddress(reference[1:-1])
    if atype != AddrType.IPV6:
        log.logandraise(InvalidAddress(uristr, "not an IPv6 reference"), logging.DEBUG)
    return atype

def _uri(fields, **hostfields):
    uri = Uri(**fields, **hostfields)
    log.debug("{!r} --> {!r}".format(uri.val, uri))
    return uri
