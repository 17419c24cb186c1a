import re
from typing import List, Tuple

from .errors import InvalidOperand

Token = Tuple[str, str, int]  # (type, value, col)

SYMBOLS = {
    '(': 'LPAREN',
    ')': 'RPAREN',
    ',': 'COMMA',
    '^': 'CARET',
    '*': 'STAR',
    '/': 'SLASH',
    '%': 'PERCENT',
    '+': 'PLUS',
    '-': 'DASH',
}

WS = ' \t\r\n'

_id_re = re.compile(r'[A-Za-z_][A-Za-z0-9_]*')
_num_re = re.compile(r'(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?')


def tokenize(s: str, col_offset: int = 0) -> List[Token]:
    """Split one side of an equation into tokens.

    Columns are 1-based and shifted by ``col_offset`` so that the right-hand
    side of a formula reports positions relative to the whole input.
    """
    tokens: List[Token] = []
    i = 0
    n = len(s)
    while i < n:
        ch = s[i]
        col = i + 1 + col_offset
        if ch in WS:
            i += 1
            continue
        m = _num_re.match(s, i)
        if m:
            tokens.append(('NUMBER', m.group(0), col))
            i = m.end()
            continue
        m = _id_re.match(s, i)
        if m:
            tokens.append(('ID', m.group(0), col))
            i = m.end()
            continue
        if ch in SYMBOLS:
            tokens.append((SYMBOLS[ch], ch, col))
            i += 1
            continue
        raise InvalidOperand(f'unexpected character: {ch!r}', col=col)
    return tokens
