"""
Shared test helpers: compiled catalog writer and an in-memory lookup.
"""

import struct
from pathlib import Path

MO_MAGIC = 0x950412DE

DEFAULT_HEADER = (
    "Content-Type: text/plain; charset=UTF-8\n"
    "Plural-Forms: nplurals=2; plural=(n != 1);\n"
)


def build_mo(messages, header=DEFAULT_HEADER):
    """
    Build the bytes of a GNU .mo file.

    Args:
        messages: Mapping of msgid -> msgstr. Plural entries use a
            (singular, plural) tuple key and a list of forms as value.
        header: Catalog header stored under the empty msgid
    """
    entries = {"": header}
    for key, value in messages.items():
        if isinstance(key, tuple):
            entries["\x00".join(key)] = "\x00".join(value)
        else:
            entries[key] = value

    keys = sorted(entries, key=lambda k: k.encode("utf-8"))
    ids = [k.encode("utf-8") for k in keys]
    strs = [entries[k].encode("utf-8") for k in keys]

    count = len(keys)
    orig_offset = 7 * 4
    trans_offset = orig_offset + count * 8
    data_offset = trans_offset + count * 8

    data = b""
    orig_table = b""
    trans_table = b""
    for raw in ids:
        orig_table += struct.pack("<2I", len(raw), data_offset + len(data))
        data += raw + b"\x00"
    for raw in strs:
        trans_table += struct.pack("<2I", len(raw), data_offset + len(data))
        data += raw + b"\x00"

    header_block = struct.pack(
        "<7I", MO_MAGIC, 0, count, orig_offset, trans_offset, 0, data_offset
    )
    return header_block + orig_table + trans_table + data


def write_mo(path, messages, header=DEFAULT_HEADER):
    """Write a compiled catalog to ``path`` and return the path."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(build_mo(messages, header))
    return path


class FakeLookup:
    """
    In-memory NativeLookup: entries per domain, identity when missing.

    Plural entries are keyed by (singular_key, plural_key) and hold a list
    of forms selected with the English rule.
    """

    def __init__(self, domains=None):
        self.domains = domains or {}
        self.bound = {}
        self.codepages = {}
        self.calls = []

    def bind(self, domain, directory):
        self.bound.setdefault(domain, directory)

    def set_codepage(self, domain, codepage):
        self.codepages[domain] = codepage

    def lookup(self, domain, key):
        self.calls.append(("lookup", domain, key))
        return self.domains.get(domain, {}).get(key, key)

    def lookup_plural(self, domain, singular_key, plural_key, count):
        self.calls.append(("lookup_plural", domain, singular_key, plural_key, count))
        forms = self.domains.get(domain, {}).get((singular_key, plural_key))
        if forms is None:
            return singular_key if count == 1 else plural_key
        return forms[0 if count == 1 else 1]
