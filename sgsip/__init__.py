import sys
import logging
import types
import re

assert sys.version_info >= (3,8)

class Logger(logging.Logger):
    def logandraise(self, exception, level=logging.ERROR):
        self.log(level, str(exception))
        raise exception from None
logging.setLoggerClass(Logger)

class ColoredFormatter(logging.Formatter):
    RECORD_RE = re.compile("(?P<input>'.*') --> (?P<record>.+)")
    default_time_format = "%H:%M:%S"
    escapecodes = {'CRITICAL':('2;91;41','97'),
                   'ERROR':('2;91','2;91'),
                   'WARNING':('22;93','97'),
                   'INFO':('2;96','97'),
                   'DEBUG':('2;94','97')
                   }
    def format(self, record):
        record.indentedmessage = self.indentmessage(logging.LogRecord.getMessage(record))
        record.color1,record.color2 = ColoredFormatter.escapecodes.get(record.levelname, ('97','97'))
        return logging.Formatter.format(self, record)
    def indentmessage(self, message):
        lines = message.splitlines()
        if lines:
            decoded = ColoredFormatter.RECORD_RE.match(lines[0])
            if decoded:
                lines[0] = "\x1b[92m{input}\x1b[m --> {record}".format(**decoded.groupdict())
        return '\n   '.join(lines)


# Module internal loggers
LOGLEVELS = (('Address', 'WARNING'),
             ('URI',     'WARNING'))
loghandler = logging.StreamHandler(sys.stdout)
logformatter = ColoredFormatter("\x1b[2;37m%(asctime)s \x1b[%(color1)sm%(levelname)-8s\x1b[m \x1b[4m%(name)s\x1b[m \x1b[%(color2)sm%(indentedmessage)s\x1b[m")
loghandler.setFormatter(logformatter)

def setuplogger(submodule, level):
    log = logging.getLogger('sgsip.' + submodule)
    # created before this package was imported, with another logger class
    if not hasattr(log, 'logandraise'):
        log.logandraise = types.MethodType(Logger.logandraise, log)
    log.setLevel(level)
    if loghandler not in log.handlers:
        log.addHandler(loghandler)
    return log

loggers = {}
for submodule,level in LOGLEVELS:
    loggers[submodule] = setuplogger(submodule, level)

def setloglevel(level, *submodules):
    """Change the level of the package loggers, all of them when no submodule is named."""
    for submodule in submodules or loggers.keys():
        loggers[submodule].setLevel(level)


from .Error import SGSIPError, UnknownScheme, UnknownProtocol, EmptyUser, InvalidAddress, InvalidPort, MalformedUri
from .Address import AddrType, Proto, SocketAddress, DEFAULT_PORT, DEFAULT_PROTO, classifyaddress, resolveprotocol, parsesocketaddress
from .URI import Schema, Uri, resolvescheme, parseuri
