import logging
from pathlib import Path
import sys
import os

sys.path.append(os.path.join(os.path.dirname(__file__), 'src'))

from torrentmeta import MetaInfo, MetainfoError


def main(argv):
    args = argv[1:]
    verbose = "-v" in args
    args = [a for a in args if a != "-v"]
    if len(args) != 1:
        print(f"usage: {argv[0]} [-v] FILE.torrent")
        return 2

    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING)

    torrent_path = Path(args[0])
    try:
        meta = MetaInfo.from_file(torrent_path)
        summary = {
            "name": meta.name,
            "announce": meta.announce,
            "announce_list": meta.announce_list,
            "files": meta.files,
            "pieces": f"{len(meta.pieces)} x {meta.piece_length}",
        }
        info_hash = meta.info_hash
    except (OSError, MetainfoError) as e:
        print(f"[Main] Could not load {torrent_path}: {e}")
        return 1

    for key, value in summary.items():
        print(f"{key}:", value)
    print("Computed info_hash:", info_hash.hex())
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv))
