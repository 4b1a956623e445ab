from clup.core.hasher import HASH_ALGORITHMS
from clup.core.models import HashMode, ExtensionPreset

HASH_MODE_ALIASES = {
    "content": HashMode.CONTENT,
    "extension": HashMode.CONTENT_AND_EXTENSION,
    "filename": HashMode.CONTENT_AND_FILENAME,
}

HASH_MODE_CHOICES = list(HASH_MODE_ALIASES.keys())

HASH_MODE_HELP_TEXT = (
    "How files are matched as duplicates:\n"
    "  content    : Same content\n"
    "  extension  : Same content and extension\n"
    "  filename   : Same content and filename\n"
)

HASH_ALGORITHM_CHOICES = list(HASH_ALGORITHMS.keys())

HASH_ALGORITHM_HELP_TEXT = (
    "Digest used for file contents:\n"
    "  md5        : MD5 (default)\n"
    "  xxh64      : xxHash64, faster on large files\n"
)

PRESET_ALIASES = {preset.value: preset for preset in ExtensionPreset}

PRESET_CHOICES = list(PRESET_ALIASES.keys())

PRESET_HELP_TEXT = (
    "Quick filter for common file types (cannot be combined with --include/--exclude):\n"
    + "".join(f"  {p.value:<11}: {' '.join(p.extensions)}\n" for p in ExtensionPreset)
)

EPILOG_TEXT = """
Examples:
  List duplicates in Downloads into a report file in the same folder
  %(prog)s list -s ~/Downloads

  Delete duplicate photos between 500KB and 10MB, keeping the oldest copy
  %(prog)s delete -s ~/Pictures -i jpg,png -m 500K -M 10MB

  Same as above but send files to the trash and write a log next to the photos
  %(prog)s delete -s ~/Pictures -i jpg,png -m 500K -M 10MB --trash --logdir-root

  Move duplicates that also share the same filename into a separate folder
  %(prog)s move -s ~/Music -t ~/Music-duplicates --hash filename

  List duplicates using the faster xxHash64 digest
  %(prog)s list -s ~/Videos --algorithm xxh64
"""
