"""Tests for sgsip.Address: classifier, protocol table and socket addresses."""

import pytest

from sgsip.Address import AddrType, Proto, SocketAddress, classifyaddress, resolveprotocol, parsesocketaddress
from sgsip.Error import SGSIPError, UnknownProtocol, InvalidAddress, InvalidPort


class TestClassifyAddress:
    def test_ipv4(self):
        assert classifyaddress('192.0.2.1') == AddrType.IPV4

    def test_ipv6(self):
        assert classifyaddress('2001:db8::1') == AddrType.IPV6
        assert classifyaddress('::1') == AddrType.IPV6

    def test_ipv4_mapped_ipv6(self):
        # the first ':' comes before any '.'
        assert classifyaddress('::ffff:192.0.2.1') == AddrType.IPV6

    def test_hostname(self):
        assert classifyaddress('host.example') == AddrType.HOST

    def test_not_an_ip_literal(self):
        assert classifyaddress('999.1.1.1') == AddrType.HOST
        assert classifyaddress('[::1]') == AddrType.HOST
        assert classifyaddress('') == AddrType.HOST

    def test_scoped_ipv6_is_not_an_ip_literal(self):
        assert classifyaddress('fe80::1%eth0') == AddrType.HOST
        assert classifyaddress('fe80::1%1') == AddrType.HOST


PROTOCOLS = [('udp', Proto.UDP), ('tcp', Proto.TCP), ('tls', Proto.TLS),
             ('sctp', Proto.SCTP), ('ws', Proto.WS), ('wss', Proto.WSS)]

class TestResolveProtocol:
    @pytest.mark.parametrize('canonical,protoid', PROTOCOLS)
    def test_lower_and_upper_case(self, canonical, protoid):
        assert resolveprotocol(canonical) == (canonical, protoid)
        assert resolveprotocol(canonical.upper()) == (canonical, protoid)

    @pytest.mark.parametrize('token', ['Udp', 'tCP', 'Wss', 'http', 'udp ', '', 'udp6'])
    def test_unknown(self, token):
        with pytest.raises(UnknownProtocol) as excinfo:
            resolveprotocol(token)
        assert excinfo.value.value == token


class TestDefaults:
    def test_bare_host(self):
        sockaddr = parsesocketaddress('host.example')
        assert sockaddr.addr == 'host.example'
        assert sockaddr.atype == AddrType.HOST
        assert sockaddr.proto == 'udp'
        assert sockaddr.protoid == Proto.UDP
        assert sockaddr.port == '5060'
        assert sockaddr.portno == 5060

    def test_bare_ipv4(self):
        sockaddr = parsesocketaddress('192.0.2.1')
        assert sockaddr.atype == AddrType.IPV4
        assert sockaddr.portno == 5060

    def test_bare_ipv6_reference(self):
        sockaddr = parsesocketaddress('[::1]')
        assert sockaddr.addr == '[::1]'
        assert sockaddr.atype == AddrType.IPV6
        assert sockaddr.proto == 'udp'
        assert sockaddr.portno == 5060

    def test_protocol_without_port(self):
        sockaddr = parsesocketaddress('tcp:host.example')
        assert sockaddr.proto == 'tcp'
        assert sockaddr.addr == 'host.example'
        assert sockaddr.port == '5060'
        assert sockaddr.portno == 5060

    def test_protocol_with_ipv6_without_port(self):
        sockaddr = parsesocketaddress('tls:[2001:db8::1]')
        assert sockaddr.proto == 'tls'
        assert sockaddr.addr == '[2001:db8::1]'
        assert sockaddr.atype == AddrType.IPV6
        assert sockaddr.portno == 5060


class TestProtocolHostPort:
    def test_udp_host_port(self):
        sockaddr = parsesocketaddress('udp:host.example:5070')
        assert sockaddr == SocketAddress(val='udp:host.example:5070', proto='udp', protoid=Proto.UDP,
                                         addr='host.example', atype=AddrType.HOST, port='5070', portno=5070)

    def test_tcp_ipv6(self):
        sockaddr = parsesocketaddress('tcp:[2001:db8::1]:5061')
        assert sockaddr.proto == 'tcp'
        assert sockaddr.protoid == Proto.TCP
        assert sockaddr.addr == '[2001:db8::1]'
        assert sockaddr.atype == AddrType.IPV6
        assert sockaddr.port == '5061'
        assert sockaddr.portno == 5061

    def test_uppercase_protocol(self):
        sockaddr = parsesocketaddress('TLS:host.example:5061')
        assert sockaddr.proto == 'tls'
        assert sockaddr.protoid == Proto.TLS

    def test_ipv4_port_without_protocol(self):
        sockaddr = parsesocketaddress('192.0.2.1:5080')
        assert sockaddr.proto == 'udp'
        assert sockaddr.addr == '192.0.2.1'
        assert sockaddr.atype == AddrType.IPV4
        assert sockaddr.portno == 5080

    def test_ipv6_port_without_protocol(self):
        sockaddr = parsesocketaddress('[2001:db8::1]:5062')
        assert sockaddr.proto == 'udp'
        assert sockaddr.addr == '[2001:db8::1]'
        assert sockaddr.atype == AddrType.IPV6
        assert sockaddr.portno == 5062

    def test_mixed_case_protocol_is_a_host(self):
        # 'Tls' is not a protocol, so 'Tls' is the host and the rest the port
        with pytest.raises(InvalidPort):
            parsesocketaddress('Tls:host.example:5061')

    def test_host_named_like_nothing_known(self):
        sockaddr = parsesocketaddress('proxy:5065')
        assert sockaddr.addr == 'proxy'
        assert sockaddr.proto == 'udp'
        assert sockaddr.portno == 5065

    def test_port_zero(self):
        assert parsesocketaddress('host.example:0').portno == 0

    def test_leading_zeros_kept_in_port_text(self):
        sockaddr = parsesocketaddress('host.example:05060')
        assert sockaddr.port == '05060'
        assert sockaddr.portno == 5060

    @pytest.mark.parametrize('sockstr', [':5070', 'udp::5070'])
    def test_empty_host(self, sockstr):
        sockaddr = parsesocketaddress(sockstr)
        assert sockaddr.addr == ''
        assert sockaddr.atype == AddrType.HOST
        assert sockaddr.proto == 'udp'
        assert sockaddr.portno == 5070


class TestErrors:
    @pytest.mark.parametrize('sockstr', ['[192.0.2.1]', '[host.example]', '[]'])
    def test_bracketed_non_ipv6(self, sockstr):
        with pytest.raises(InvalidAddress):
            parsesocketaddress(sockstr)

    def test_bracketed_non_ipv6_with_port(self):
        with pytest.raises(InvalidAddress):
            parsesocketaddress('tcp:[host.example]:5060')

    def test_garbage_after_reference(self):
        with pytest.raises(InvalidAddress):
            parsesocketaddress('[::1]x')
        with pytest.raises(InvalidAddress):
            parsesocketaddress('tcp:[::1]x')

    def test_unterminated_reference(self):
        with pytest.raises(InvalidAddress):
            parsesocketaddress('tcp:[::1')

    @pytest.mark.parametrize('sockstr', ['host.example:abc', 'host.example:', 'host.example:-5',
                                         'host.example:+5', 'tcp:[::1]:x', 'udp:host.example:5 060'])
    def test_bad_port(self, sockstr):
        with pytest.raises(InvalidPort) as excinfo:
            parsesocketaddress(sockstr)
        assert excinfo.value.value == sockstr

    def test_empty_input(self):
        with pytest.raises(InvalidAddress):
            parsesocketaddress('')

    def test_scoped_ipv6_reference(self):
        with pytest.raises(InvalidAddress):
            parsesocketaddress('[fe80::1%eth0]')
        with pytest.raises(InvalidAddress):
            parsesocketaddress('tcp:[fe80::1%eth0]:5060')

    def test_errors_share_a_base_class(self):
        with pytest.raises(SGSIPError):
            parsesocketaddress('host.example:abc')


class TestRecord:
    @pytest.mark.parametrize('sockstr', ['host.example', '[::1]', 'udp:host.example:5070',
                                         'tcp:[2001:db8::1]:5061', '192.0.2.1:5080', 'WSS:host.example'])
    def test_reparse_val(self, sockstr):
        sockaddr = parsesocketaddress(sockstr)
        assert sockaddr.val == sockstr
        assert parsesocketaddress(sockaddr.val) == sockaddr

    def test_str_is_input(self):
        assert str(parsesocketaddress('tcp:host.example:5061')) == 'tcp:host.example:5061'

    def test_immutable(self):
        sockaddr = parsesocketaddress('host.example')
        with pytest.raises(AttributeError):
            sockaddr.port = '5070'
