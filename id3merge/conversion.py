# Copyright (c) 2009, Karoly Lorentey  <karoly@lorentey.hu>

"""Binary integer and unsynchronisation conversions used by ID3v2 tags."""

class Unsync:
    @staticmethod
    def decode(data):
        "Drop the zero byte inserted after each 0xFF byte by unsynchronisation."
        result = bytearray()
        previous = None
        for b in data:
            if previous != 0xFF or b != 0x00:
                result.append(b)
            previous = b
        return bytes(result)

class Syncsafe:
    """Syncsafe integers: big-endian, seven bits per byte.

    The high bit of each byte is always clear, so the encoded value never
    looks like an MPEG frame sync.
    """
    @staticmethod
    def is_valid(data):
        "Return True if no byte of data has its high bit set."
        return all(b < 0x80 for b in data)

    @staticmethod
    def decode(data):
        if not Syncsafe.is_valid(data):
            raise ValueError("Invalid syncsafe integer")
        value = 0
        for b in data:
            value = (value << 7) | b
        return value

    @staticmethod
    def encode(i, *, width=4):
        "Encode a nonnegative integer into exactly width syncsafe bytes."
        if i < 0:
            raise ValueError("Syncsafe value is negative")
        if i >> (7 * width):
            raise ValueError("Syncsafe value does not fit in {0} bytes".format(width))
        return bytes((i >> (7 * shift)) & 0x7F for shift in reversed(range(width)))

class Int8:
    "Plain big-endian integers of any length."

    @staticmethod
    def decode(data):
        return int.from_bytes(bytes(data), "big")

    @staticmethod
    def encode(i, *, width=-1):
        """Encode a nonnegative integer in big-endian byte order.

        A positive width gives the exact length of the result; a negative
        width gives its minimum length.
        """
        assert width != 0
        if i < 0:
            raise ValueError("Nonnegative integer expected")
        length = max(abs(width), (i.bit_length() + 7) // 8)
        if width > 0 and length > width:
            raise ValueError("Integer too large")
        return i.to_bytes(length, "big")
