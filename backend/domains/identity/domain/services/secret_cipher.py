"""
Secret Cipher - 用户密钥加解密

AES-256-CBC + PKCS7，每次加密使用新的 16 字节 IV。
密文附带 HMAC-SHA256 标签（覆盖 iv || ciphertext），解密前以常量时间校验，
任何被篡改的字节都会导致 DecryptionError，而不是返回错误的明文。

存储格式::

    hex(iv) ":" hex(ciphertext || tag)
"""

import binascii
import os

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes, hmac, padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes
from cryptography.hazmat.primitives.kdf.hkdf import HKDF

from exceptions import ConfigurationError, DecryptionError
from libs.config import CipherConfig
from utils.logging import get_logger

logger = get_logger(__name__)

KEY_SIZE = 32
IV_SIZE = 16
BLOCK_SIZE = 16
TAG_SIZE = 32
DELIMITER = ":"

_MAC_KEY_INFO = b"gutcare/secret-cipher/hmac-sha256"


class SecretCipher:
    """对称加解密单个密钥字符串

    服务端密钥在构造时校验一次，之后每次调用都是纯函数。
    """

    def __init__(self, config: CipherConfig) -> None:
        key = config.encryption_key_bytes
        if len(key) != KEY_SIZE:
            raise ConfigurationError(
                f"Encryption key must be exactly {KEY_SIZE} bytes",
                fields=["encryption_key"],
            )
        self._enc_key = key
        self._mac_key = HKDF(
            algorithm=hashes.SHA256(),
            length=KEY_SIZE,
            salt=None,
            info=_MAC_KEY_INFO,
        ).derive(key)

    def encrypt(self, plaintext: str) -> str:
        """加密明文

        Args:
            plaintext: 明文字符串

        Returns:
            hex(iv):hex(ciphertext||tag)
        """
        iv = os.urandom(IV_SIZE)
        padder = padding.PKCS7(BLOCK_SIZE * 8).padder()
        padded = padder.update(plaintext.encode("utf-8")) + padder.finalize()

        encryptor = Cipher(algorithms.AES(self._enc_key), modes.CBC(iv)).encryptor()
        ciphertext = encryptor.update(padded) + encryptor.finalize()

        return iv.hex() + DELIMITER + (ciphertext + self._tag(iv, ciphertext)).hex()

    def decrypt(self, blob: str) -> str:
        """解密密文

        Args:
            blob: encrypt() 的输出

        Returns:
            原始明文

        Raises:
            DecryptionError: 格式错误、标签不匹配（篡改或密钥错误）、填充或编码错误
        """
        iv_hex, sep, body_hex = blob.partition(DELIMITER)
        if not sep:
            raise self._fail("missing delimiter")

        iv = self._unhex(iv_hex)
        body = self._unhex(body_hex)
        if len(iv) != IV_SIZE:
            raise self._fail("bad iv length")
        if len(body) <= TAG_SIZE:
            raise self._fail("ciphertext too short")

        ciphertext, tag = body[:-TAG_SIZE], body[-TAG_SIZE:]
        if len(ciphertext) % BLOCK_SIZE:
            raise self._fail("ciphertext not block aligned")

        verifier = hmac.HMAC(self._mac_key, hashes.SHA256())
        verifier.update(iv + ciphertext)
        try:
            verifier.verify(tag)
        except InvalidSignature:
            raise self._fail("authentication tag mismatch") from None

        decryptor = Cipher(algorithms.AES(self._enc_key), modes.CBC(iv)).decryptor()
        padded = decryptor.update(ciphertext) + decryptor.finalize()
        unpadder = padding.PKCS7(BLOCK_SIZE * 8).unpadder()
        try:
            data = unpadder.update(padded) + unpadder.finalize()
            return data.decode("utf-8")
        except ValueError:
            # UnicodeDecodeError 也是 ValueError
            raise self._fail("bad padding or encoding") from None

    def _tag(self, iv: bytes, ciphertext: bytes) -> bytes:
        signer = hmac.HMAC(self._mac_key, hashes.SHA256())
        signer.update(iv + ciphertext)
        return signer.finalize()

    def _unhex(self, text: str) -> bytes:
        """严格十六进制解码，只接受 encrypt() 产生的小写形式"""
        try:
            raw = binascii.unhexlify(text)
        except (binascii.Error, ValueError):
            raise self._fail("invalid hex") from None
        if raw.hex() != text:
            raise self._fail("non-canonical hex")
        return raw

    @staticmethod
    def _fail(reason: str) -> DecryptionError:
        logger.warning("Secret decryption failed: %s", reason)
        return DecryptionError(reason=reason)
