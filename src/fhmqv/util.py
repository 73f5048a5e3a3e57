import os, binascii

def size_bits(maxval):
    return maxval.bit_length() or 1

def size_bytes(maxval):
    return (size_bits(maxval) + 7) // 8

def number_to_bytes(num, maxval):
    # fixed-width, left-padded big-endian, as wide as maxval needs
    if num < 0 or num > maxval:
        raise ValueError("%d does not fit below %d" % (num, maxval))
    num_bytes = size_bytes(maxval)
    s = binascii.unhexlify(("%0" + str(2*num_bytes) + "x") % num)
    assert len(s) == num_bytes
    return s

def bytes_to_number(s):
    if not isinstance(s, (bytes, bytearray)):
        raise TypeError("expected bytes, got %r" % type(s))
    if not s:
        return 0
    return int(binascii.hexlify(s), 16)

def generate_mask(maxval):
    num_bytes = size_bytes(maxval)
    leftover_bits = size_bits(maxval) % 8
    if leftover_bits:
        top_byte_mask_int = (0x1 << leftover_bits) - 1
    else:
        top_byte_mask_int = 0xff
    return (top_byte_mask_int, num_bytes)

def random_list_of_ints(count, entropy_f=os.urandom):
    data = entropy_f(count)
    if len(data) != count:
        raise ValueError("entropy source returned %d bytes, wanted %d"
                         % (len(data), count))
    return list(data)

def mask_list_of_ints(top_byte_mask_int, list_of_ints):
    return [top_byte_mask_int & list_of_ints[0]] + list_of_ints[1:]

def list_of_ints_to_number(l):
    return bytes_to_number(bytes(l))

def unbiased_randrange(start, stop, entropy_f=os.urandom):
    """Return a random integer k such that start <= k < stop, uniformly
    distributed across that range, like random.randrange but
    cryptographically bound and unbiased.

    We draw a few more bits than needed, mask down to the bit length of the
    range, and retry when the candidate falls outside it. That takes fewer
    than two tries on average.
    """
    maxval = stop - start
    if maxval <= 0:
        raise ValueError("empty range [%d, %d)" % (start, stop))

    top_byte_mask_int, num_bytes = generate_mask(maxval)
    while True:
        enough_bytes = random_list_of_ints(num_bytes, entropy_f)
        candidate_bytes = mask_list_of_ints(top_byte_mask_int, enough_bytes)
        candidate_int = list_of_ints_to_number(candidate_bytes)
        if candidate_int < maxval:
            return start + candidate_int

def random_exponent(max_exponent, entropy_f=os.urandom):
    """Uniform integer in [1, max_exponent]."""
    return unbiased_randrange(1, max_exponent + 1, entropy_f)
