from enum import Enum, Flag, auto


class Compliant(Flag):
    '''It indicates which degree of compliantness the data must reflect the format'''
    NONE  = 0
    ENUM  = 1 << 0
    MAGIC = 1 << 1
    INHERIT = 1 << 2


class Absent(Enum):
    '''What a typed lookup returns when the container has no such chunk.'''
    NONE  = auto()  # None
    EMPTY = auto()  # the decoder applied to an empty view
