from enum import Flag


class Compliant(Flag):
    '''It indicates how strictly the chunk table must reflect the format'''
    NONE     = 0
    CHUNKS   = 1 << 0
    TRAILING = 1 << 1
    STRICT   = CHUNKS | TRAILING
