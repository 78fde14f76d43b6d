"""Builds small synthetic resources.arsc buffers for the tests."""

import struct

NO_ENTRY = 0xFFFFFFFF
UTF8_FLAG = 1 << 8


def utf8_length(n):
    """Length prefix of a UTF-8 pool string: one byte, or two above 0x7f."""
    if n > 0x7f:
        return struct.pack('<BB', 0x80 | ((n >> 8) & 0x7f), n & 0xff)
    return struct.pack('<B', n)


def string_pool(strings, utf8=False):
    offsets = []
    data = b''
    for s in strings:
        offsets.append(len(data))
        if utf8:
            enc = s.encode('utf-8')
            data += utf8_length(len(s)) + utf8_length(len(enc)) + enc + b'\x00'
        else:
            # surrogatepass lets tests store lone surrogates
            enc = s.encode('utf-16-le', errors='surrogatepass')
            data += struct.pack('<H', len(enc) // 2) + enc + b'\x00\x00'
    data += b'\x00' * (-len(data) % 4)

    header_size = 28
    strings_start = header_size + 4 * len(strings)
    size = strings_start + len(data)
    flags = UTF8_FLAG if utf8 else 0
    header = struct.pack('<HHIIIIII', 0x0001, header_size, size, len(strings), 0, flags, strings_start, 0)
    return header + struct.pack('<%dI' % len(strings), *offsets) + data


def config(size=64, language=b'\x00\x00', country=b'\x00\x00', density=0, sdk_version=0,
           screen_layout=0, ui_mode=0, smallest_width_dp=0, width_dp=0, height_dp=0,
           locale_script=b'', locale_variant=b'', tail=b''):
    data = struct.pack('<IHH2s2sBBHBBBBHHHH', size, 0, 0, language, country, 0, 0, density,
                       0, 0, 0, 0, 0, 0, sdk_version, 0)
    data += struct.pack('<BBHHH', screen_layout, ui_mode, smallest_width_dp, width_dp, height_dp)
    data += locale_script.ljust(4, b'\x00') + locale_variant.ljust(8, b'\x00')
    data += tail.ljust(max(size - 48, 0), b'\x00')
    return data[:max(size, 28)]


def value(data_type, data, res0=0, size=8):
    return struct.pack('<HBBI', size, res0, data_type, data)


def simple_entry(key, data_type, data, flags=0, res0=0, value_size=8):
    return struct.pack('<HHI', 8, flags, key) + value(data_type, data, res0, value_size)


def map_entry(key, items, parent=0, flags=1):
    data = struct.pack('<HHIII', 16, flags, key, parent, len(items))
    for name, data_type, item in items:
        data += struct.pack('<I', name) + value(data_type, item)
    return data


def type_spec(type_id, entry_count, res0=0):
    return struct.pack('<HHIBBHI', 0x0202, 16, 16 + 4 * entry_count, type_id, res0, 0, entry_count) \
        + b'\x00' * (4 * entry_count)


def type_chunk(type_id, entries, cfg=None, sparse=False, flags=None, reserved=0, entry_count=None):
    """`entries` is a list of (index, entry bytes) pairs."""
    if cfg is None:
        cfg = config()

    blobs = b''
    offsets = []
    for index, blob in entries:
        offsets.append((index, len(blobs)))
        blobs += blob

    if sparse:
        count = len(offsets)
        index_table = b''.join(struct.pack('<HH', index, offset // 4) for index, offset in offsets)
    else:
        count = max([index for index, _ in offsets] + [-1]) + 1
        table = [NO_ENTRY] * count
        for index, offset in offsets:
            table[index] = offset
        index_table = struct.pack('<%dI' % count, *table)

    if entry_count is None:
        entry_count = count
    if flags is None:
        flags = 1 if sparse else 0

    header_size = 20 + len(cfg)
    entries_start = header_size + len(index_table)
    size = entries_start + len(blobs)
    header = struct.pack('<HHIBBHII', 0x0201, header_size, size, type_id, flags, reserved, entry_count,
                         entries_start)
    return header + cfg + index_table + blobs


def package(package_id, name, type_names, key_names, chunks, utf8=False):
    header_size = 288
    type_pool = string_pool(type_names, utf8)
    key_pool = string_pool(key_names, utf8)
    body = type_pool + key_pool + b''.join(chunks)
    size = header_size + len(body)
    header = struct.pack('<HHII', 0x0200, header_size, size, package_id) \
        + name.encode('utf-16-le').ljust(256, b'\x00') \
        + struct.pack('<IIIII', header_size, len(type_names), header_size + len(type_pool), len(key_names), 0)
    return header + body


def table(global_strings, packages, utf8=False):
    body = string_pool(global_strings, utf8) + b''.join(packages)
    return struct.pack('<HHII', 0x0002, 12, 12 + len(body), len(packages)) + body
