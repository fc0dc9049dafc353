#coding: utf-8

import pyparsing as pp

class ParseException(Exception):
    def __init__(self, name, value, pos):
        super().__init__(name, value, pos)
        self.name = name
        self.value = value
        self.pos = pos
    def __str__(self):
        return "{!r} is not a valid {}. Error at pos={} ({})".format(self.value, self.name, self.pos, self.value[self.pos] if self.pos<len(self.value) else '')

class Parser:
    def __init__(self, name, ppParser):
        self.name = name
        self.parser = ppParser + pp.StringEnd()
        self.parser.leave_whitespace()
        self.parser.parse_with_tabs()
    def parse(self, string):
        try:
            return self.parser.parse_string(string)
        except pp.ParseException as e:
            raise ParseException(self.name, string, e.loc) from None


#hostport         =  host [ ":" port ]
#port             =  1*DIGIT
#
#   Only the ASCII digits are accepted: no sign, no blank, no grouping
#   underscore.
port = Parser('port', pp.Word(pp.nums).set_parse_action(lambda toks: [int(toks[0])]))

def parseport(string):
    return port.parse(string)[0]


#uri-parameters    =  *( ";" uri-parameter)
#uri-parameter     =  transport-param / user-param / method-param
#                     / ttl-param / maddr-param / lr-param / other-param
#transport-param   =  "transport="
#                     ( "udp" / "tcp" / "sctp" / "tls"
#                     / other-transport)
#
#   The parameter list is kept as raw text. Only the first transport-param
#   is looked for, its value extends up to the next ";" and is checked
#   against the protocol table by the caller, an empty value included.
transport_param = pp.Suppress(pp.Literal(';transport=')) + pp.Optional(pp.CharsNotIn(';'))
transport_param.leave_whitespace()
transport_param.parse_with_tabs()

def findtransport(params):
    """Value of the first ';transport=' marker in params, None if there is none."""
    for tokens, start, end in transport_param.scan_string(params, max_matches=1):
        return tokens[0] if tokens else ''
    return None
