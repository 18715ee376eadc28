"""Safe signature blob parsing.

Safe packs owner signatures back to back. Each entry starts with a 65-byte
``r | s | v`` block, interpreted by ``v``:

- ``r`` left-padded address and ``s == 0``: pre-validated signature, the
  signer is the low 20 bytes of ``r``.
- ``v`` 0 or 1 followed by a 32-byte word: contract signature, the signer is
  the low 20 bytes of that word and the entry spans 129 bytes.
- ``v`` 27 or 28: plain ECDSA over the Safe transaction hash (EIP-712 digest,
  no message prefix).
"""

from __future__ import annotations

from onchain_event_handler.chain.base import ChainReader
from onchain_event_handler.utils.logging import get_logger

log = get_logger(__name__)

_SIG_HEX = 130  # 65 bytes
_CONTRACT_SIG_HEX = 258  # 129 bytes
_WORD_HEX = 64
_ZERO_WORD = "0" * _WORD_HEX
_ZERO_ADDRESS = "0x" + "0" * 40


def extract_signers(signatures: str, safe_tx_hash: str, reader: ChainReader) -> list[str]:
    """Return lowercased signer addresses found in a concatenated signature blob."""
    signers: list[str] = []
    sig_bytes = signatures.removeprefix("0x").lower()

    i = 0
    while i + _SIG_HEX <= len(sig_bytes):
        r_hex = sig_bytes[i:i + _WORD_HEX]
        s_hex = sig_bytes[i + _WORD_HEX:i + 2 * _WORD_HEX]
        try:
            v = int(sig_bytes[i + 2 * _WORD_HEX:i + _SIG_HEX], 16)
        except ValueError:
            log.warning("signature_malformed", offset=i // 2)
            i += _SIG_HEX
            continue

        # r carries the address; must be checked before the contract form
        if r_hex.startswith("0" * 24) and s_hex == _ZERO_WORD:
            _append(signers, "0x" + r_hex[24:])
            i += _SIG_HEX
            continue

        if v in (0, 1) and i + _CONTRACT_SIG_HEX <= len(sig_bytes):
            word = sig_bytes[i + _SIG_HEX:i + _SIG_HEX + _WORD_HEX]
            _append(signers, "0x" + word[24:])
            i += _CONTRACT_SIG_HEX
            continue

        if v in (27, 28):
            try:
                r, s = int(r_hex, 16), int(s_hex, 16)
            except ValueError:
                r = s = 0
            address = reader.recover_address(safe_tx_hash, r, s, v - 27) if r and s else None
            if address:
                signers.append(address.lower())
            else:
                log.warning("signature_recovery_skipped", offset=i // 2)
        else:
            log.warning("signature_unknown_v", v=v, offset=i // 2)

        i += _SIG_HEX

    return signers


def _append(signers: list[str], address: str) -> None:
    if address != _ZERO_ADDRESS:
        signers.append(address.lower())
