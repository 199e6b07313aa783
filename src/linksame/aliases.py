DESCRIPTION_TEXT = (
    "LinkSame: replace identical files with links to one real file.\n"
    "\n"
    "Search recursively through the root directories to find identical files.\n"
    "For each set of identical files, keep only the file with the longest name and\n"
    "replace all other copies with hardlinks or symlinks to that file."
)

UPDATE_HELP_TEXT = (
    "Only link files identical to the specified update file.\n"
    "Example    : %(prog)s --update ./libexample.so.1.0 -w /usr/lib\n"
)

PATTERN_HELP_TEXT = (
    "Only link files whose name matches this glob pattern.\n"
    "Example    : %(prog)s --pattern 'lib*.so*' /usr/lib\n"
)

EPILOG_TEXT = """
Examples:
  Show what would be linked in a directory tree (nothing is changed)
  %(prog)s ~/mirror

  Replace identical files with hardlinks
  %(prog)s -w ~/mirror ~/backup

  Turn copies of a shared library into relative symlinks
  %(prog)s -w --symlink --pattern 'libexample.so*' /opt/lib

  Only link files that already have the same permissions and owner
  %(prog)s -w --safe ~/mirror

  Without --write, the summary reports what would have been linked.
"""
