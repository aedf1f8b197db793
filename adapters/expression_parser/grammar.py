"""
Gramatyka PEG wyrażeń Mathex (składnia cleanpeg Arpeggio).

Precedencja od najsłabiej wiążącego:
  ||  &&  |  ^  &  (== !=)  (< > <= >=)  (+ -)  (* / %)  unary(! ~)  atom

Nazwy reguł łańcuchów pokrywają się z wartościami contracts.Level —
builder AST przypisuje tag poziomu bezpośrednio z nazwy reguły.
Operatory jednoznakowe |, & wykluczają dwuznakowe ||, && przez negatywny lookahead.
"""

ROOT_RULE = "mathex"

GRAMMAR = r"""
mathex          = logical_or EOF

logical_or      = logical_and (or_op logical_and)*
logical_and     = bitwise_or (and_op bitwise_or)*
bitwise_or      = bitwise_xor (bor_op bitwise_xor)*
bitwise_xor     = bitwise_and (xor_op bitwise_and)*
bitwise_and     = equality (band_op equality)*
equality        = relational (eq_op relational)*
relational      = additive (rel_op additive)*
additive        = multiplicative (add_op multiplicative)*
multiplicative  = unary (mul_op unary)*
unary           = unary_op unary / atom

atom            = call2 / call1 / number / variable / group
call2           = name "(" logical_or "," logical_or ")"
call1           = name "(" logical_or ")"
group           = "(" logical_or ")"

or_op           = r'\|\|'
and_op          = r'&&'
bor_op          = r'\|(?!\|)'
xor_op          = r'\^'
band_op         = r'&(?!&)'
eq_op           = r'==|!='
rel_op          = r'<=|>=|<|>'
add_op          = r'[+\-]'
mul_op          = r'[*/%]'
unary_op        = r'[!~](?!=)'

number          = r'\d+(\.\d+)?'
variable        = r'[A-P]+'
name            = r'[a-z][a-z0-9]*'
"""

CHAIN_RULES = (
    "logical_or", "logical_and", "bitwise_or", "bitwise_xor", "bitwise_and",
    "equality", "relational", "additive", "multiplicative",
)

OPERATOR_RULES = (
    "or_op", "and_op", "bor_op", "xor_op", "band_op",
    "eq_op", "rel_op", "add_op", "mul_op", "unary_op",
)
