"""
Metainfo (.torrent) documents on top of the bencodec codec.
"""
from .metainfo import INFO_KEY, MetaInfo, MetainfoError, extract_info, info_bytes, info_hash

__all__ = ['MetaInfo', 'MetainfoError', 'INFO_KEY', 'extract_info', 'info_bytes', 'info_hash']
