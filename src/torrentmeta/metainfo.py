import hashlib
import logging
from pathlib import Path
from typing import List, Optional

from bencodec import BencodeDecodeError, DecoderLimits, decode, encode
from bencodec.structure import BencodeDict, BencodeInt, BencodeList, BencodeString

logger = logging.getLogger(__name__)

INFO_KEY = b"info"
PIECE_HASH_LEN = 20


class MetainfoError(ValueError):
    """The document decoded fine but is not a usable metainfo dictionary."""


def extract_info(root, key: bytes = INFO_KEY) -> BencodeDict:
    """Returns the sub-dictionary bound to `key` in a decoded metainfo root."""
    if not isinstance(root, BencodeDict):
        raise MetainfoError("Invalid torrent: root must be a dictionary")

    info = root.get(key)
    if info is None:
        raise MetainfoError(f"Torrent missing {key.decode(errors='replace')!r} dictionary")
    if not isinstance(info, BencodeDict):
        raise MetainfoError(f"Torrent {key.decode(errors='replace')!r} entry is not a dictionary")
    return info


def info_bytes(root, key: bytes = INFO_KEY) -> bytes:
    """
    Canonical bencoding of the info dictionary.

    This is what the info-hash is computed over. For a source file that was
    itself canonically encoded it equals the raw slice of the original bytes.
    """
    return encode(extract_info(root, key))


def info_hash(root, hasher=hashlib.sha1, key: bytes = INFO_KEY) -> bytes:
    """
    Digest of the canonical info dictionary.

    `hasher` is any hashlib-style constructor; SHA-1 gives the usual 20-byte
    BitTorrent info-hash.
    """
    digest = hasher(info_bytes(root, key)).digest()
    logger.debug("Computed info hash %s", digest.hex())
    return digest


def _text(value) -> Optional[str]:
    if isinstance(value, BencodeString):
        return value.decode(errors="replace")
    return None


class MetaInfo:
    """
    Read-only view over a decoded .torrent document.
    """
    def __init__(self, root: BencodeDict):
        self.info = extract_info(root)
        self.root = root

    @classmethod
    def from_bytes(cls, raw: bytes, limits: DecoderLimits = None) -> "MetaInfo":
        try:
            root = decode(raw, limits)
        except BencodeDecodeError as exc:
            raise MetainfoError(f"Couldn't parse torrent: {exc}") from exc
        logger.debug("Decoded metainfo document of %d bytes", len(raw))
        return cls(root)

    @classmethod
    def from_file(cls, path, limits: DecoderLimits = None) -> "MetaInfo":
        path = Path(path)
        logger.debug("Loading torrent %s", path)
        return cls.from_bytes(path.read_bytes(), limits)

    # ------------------ DIGEST ------------------

    @property
    def info_bytes(self) -> bytes:
        return encode(self.info)

    @property
    def info_hash(self) -> bytes:
        return info_hash(self.root)

    # ------------------ NAME / ANNOUNCE ------------------

    @property
    def name(self) -> Optional[str]:
        return _text(self.info.get(b"name"))

    @property
    def announce(self) -> Optional[str]:
        return _text(self.root.get(b"announce"))

    @property
    def announce_list(self) -> Optional[List[List[str]]]:
        ann_list_b = self.root.get(b"announce-list")
        if not isinstance(ann_list_b, BencodeList):
            return None

        tiers = []
        for tier in ann_list_b:
            if not isinstance(tier, BencodeList):
                continue
            urls = [_text(u) for u in tier if isinstance(u, BencodeString)]
            if urls:
                tiers.append(urls)
        return tiers or None

    # ------------------ PIECES ------------------

    @property
    def piece_length(self) -> Optional[int]:
        piece_len_b = self.info.get(b"piece length")
        return piece_len_b.value if isinstance(piece_len_b, BencodeInt) else None

    @property
    def pieces(self) -> List[bytes]:
        pieces_b = self.info.get(b"pieces")
        if not isinstance(pieces_b, BencodeString):
            return []
        raw_pieces = pieces_b.value
        if len(raw_pieces) % PIECE_HASH_LEN:
            raise MetainfoError(
                f"'pieces' length {len(raw_pieces)} is not a multiple of {PIECE_HASH_LEN}"
            )
        return [raw_pieces[i:i+PIECE_HASH_LEN] for i in range(0, len(raw_pieces), PIECE_HASH_LEN)]

    # ------------------ FILES ------------------

    @property
    def is_multi_file(self) -> bool:
        return b"files" in self.info

    @property
    def files(self) -> List[dict]:
        if not self.is_multi_file:
            length_b = self.info.get(b"length")
            if not isinstance(length_b, BencodeInt):
                raise MetainfoError("Single-file torrent missing integer 'length'")
            return [{"length": length_b.value, "path": self.name}]

        files_b = self.info[b"files"]
        if not isinstance(files_b, BencodeList):
            raise MetainfoError("'files' must be a list")

        files = []
        for entry in files_b:
            if not isinstance(entry, BencodeDict):
                raise MetainfoError("'files' entries must be dictionaries")
            length_b = entry.get(b"length")
            path_b = entry.get(b"path")
            if not isinstance(length_b, BencodeInt) or not isinstance(path_b, BencodeList):
                raise MetainfoError("'files' entry needs an integer 'length' and a 'path' list")
            parts = [_text(p) for p in path_b]
            if None in parts:
                raise MetainfoError("'path' components must be strings")
            files.append({"length": length_b.value, "path": "/".join(parts)})
        return files

    @property
    def total_length(self) -> int:
        return sum(f["length"] for f in self.files)

    def __repr__(self):
        return (
            f"MetaInfo(name={self.name!r}, files={len(self.files)}, pieces={len(self.pieces)}, "
            f"multi={self.is_multi_file}, announce={self.announce!r})"
        )
