import logging
import pytest
from sv_core.canonical import canonicalize
from sv_core.constants import DEFAULT_MARKER
from sv_core.crypto import ed25519_generate, ed25519_sign, ed25519_verify, ed25519_public
from sv_core.dialect import CRLF_DIALECT, LF_DIALECT
from sv_core.envelope import decode
from sv_core.errors import FormatError, KeyFormatError
from sv_core.signer import sign, verify, check, message_region

MARKER = DEFAULT_MARKER.encode()


@pytest.fixture
def keys():
    return ed25519_generate()


def test_crypto_primitives(keys):
    pub, priv = keys
    assert len(pub) == 32 and len(priv) == 64
    assert priv[32:] == pub
    assert ed25519_public(priv) == pub
    sig = ed25519_sign(priv, b"data")
    assert ed25519_verify(pub, sig, b"data")
    assert not ed25519_verify(pub, sig, b"date")


def test_sign_verify_hello(keys):
    pub, priv = keys
    text = sign(b"hello\n", priv)
    env = decode(text)
    assert env.message == canonicalize(b"hello\n") == b"hello\r\n"
    assert text.splitlines()[2] == MARKER
    assert env.public_key == pub
    assert verify(text, pub)
    assert verify(text)


def test_wrong_key_is_false(keys):
    pub, priv = keys
    other_pub, _ = ed25519_generate()
    text = sign(b"hello\n", priv)
    assert verify(text, other_pub) is False


def test_tamper_any_message_byte(keys):
    pub, priv = keys
    text = sign(b"hello world\nsecond line\n", priv)
    n = len(decode(text).message)
    for i in range(n):
        tampered = bytearray(text)
        tampered[i] ^= 0x01
        assert verify(bytes(tampered), pub) is False, i


def test_lf_dialect(keys):
    pub, priv = keys
    d = LF_DIALECT.with_options(marker="**")
    text = sign(b"hello\r\n", priv, dialect=d)
    assert text == b"hello\n\n**\n" + decode(text, dialect=d).signature.hex().encode() + b"\n"
    assert verify(text, pub, dialect=d)
    with pytest.raises(KeyFormatError):
        verify(text, dialect=d)


def test_lf_dialect_wrapped(keys):
    pub, priv = keys
    text = sign(b"wrapped\n", priv, dialect=LF_DIALECT, line_width=40)
    sig_lines = text.split(MARKER + b"\n", 1)[1].splitlines()
    assert [len(l) for l in sig_lines] == [40, 40, 40, 8]
    assert verify(text, pub, dialect=LF_DIALECT)


def test_embed_key_override(keys):
    pub, priv = keys
    text = sign(b"hi\n", priv, dialect=LF_DIALECT, embed_key=True)
    assert decode(text, dialect=LF_DIALECT.with_options(embed_key=True)).public_key == pub


def test_dialects_do_not_cross_verify(keys):
    pub, priv = keys
    text = sign(b"hello\n", priv, dialect=LF_DIALECT)
    with pytest.raises(FormatError):
        verify(text, pub, dialect=CRLF_DIALECT)


def test_empty_message(keys):
    pub, priv = keys
    text = sign(b"", priv)
    assert text.startswith(b"\r\n" + MARKER)
    assert decode(text).message == b""
    assert verify(text, pub)


def test_resign_replaces_signature_block(keys):
    pub, priv = keys
    pub2, priv2 = ed25519_generate()
    first = sign(b"keep me\n", priv)
    second = sign(first, priv2)
    assert second.count(MARKER) == 1
    assert decode(second).message == decode(first).message
    assert verify(second) and verify(second, pub2)
    assert not verify(second, pub)


def test_message_region():
    assert message_region(b"a\r\n\r\n" + MARKER + b"\r\nsig", CRLF_DIALECT) == b"a\r\n"
    assert message_region(MARKER + b"\r\nsig", CRLF_DIALECT) == b""
    assert message_region(b"no marker here\n", CRLF_DIALECT) == b"no marker here\n"
    assert message_region(b"x\n" + MARKER + b"-ish\n", CRLF_DIALECT) == b"x\n" + MARKER + b"-ish\n"


def test_original_tool_envelope_verifies(keys):
    # layout written by the original sv: no terminator on the last message line
    pub, priv = keys
    message = b"line one\r\nline two"
    h = ed25519_sign(priv, message).hex().encode()
    text = (message + b"\r\n" + MARKER + b"\r\n" + h[:64] + b"\r\n" + h[64:] + b"\r\n"
            + pub.hex().encode() + b"\r\n")
    assert verify(text)


def test_check_result(keys):
    pub, priv = keys
    result = check(sign(b"x\n", priv))
    assert result
    assert result.public_key == pub
    assert result.envelope.message == b"x\r\n"


def test_given_key_wins_over_embedded(keys, caplog):
    pub, priv = keys
    other_pub, _ = ed25519_generate()
    caplog.set_level(logging.WARNING, logger="sv.signer")
    assert verify(sign(b"x\n", priv), other_pub) is False
    assert "differs from given key" in caplog.text


def test_seed_only_private_key(keys):
    pub, priv = keys
    assert verify(sign(b"seed\n", priv[:32]), pub)


def test_bad_private_key_length():
    with pytest.raises(KeyFormatError):
        sign(b"x", b"\x00" * 40)


def test_sign_logs(keys, caplog):
    _, priv = keys
    caplog.set_level(logging.INFO, logger="sv.signer")
    sign(b"x\n", priv)
    assert "signed 3 bytes dialect=crlf" in caplog.text


def test_mismatched_private_key_halves(keys):
    _, priv = keys
    other_pub, _ = ed25519_generate()
    with pytest.raises(KeyFormatError, match="does not match"):
        sign(b"x\n", priv[:32] + other_pub)


@pytest.mark.parametrize("width", [0, 1, 32, 50, 64])
def test_verify_needs_no_wrap_width(keys, width):
    pub, priv = keys
    assert verify(sign(b"wrapped any way\n", priv, line_width=width))


def test_lf_embedded_key_verifies_with_plain_lf(keys):
    pub, priv = keys
    text = sign(b"hi\n", priv, dialect=LF_DIALECT, embed_key=True)
    assert check(text, dialect=LF_DIALECT).public_key == pub
