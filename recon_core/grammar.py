"""
Recon Grammar Definition.

This module contains the Lark grammar for the Recon language. The lexer
drives Lark's basic lexer over the terminals declared here; the rules
document the language and tell Lark which terminals exist.
"""

recon_grammar = r"""
    start: _entry*

    // --- Objects ---
    _entry: record
          | HASH call
          | SEPARATOR

    record: ID ASSIGN value
    call: ID value

    // --- Values ---
    ?value: number
          | STRING
          | object
          | array
          | AT call

    number: INT (DOT INT)?
    object: LBRACE _entry* RBRACE
    array: LSQB (value | SEPARATOR)* RSQB

    // --- Terminals ---
    INT.2: /[0-9]+/
    ID: /[A-Za-z0-9_-]+/
    STRING: /"[^"]*"/
    SEPARATOR: /[;\n]/

    ASSIGN: "="
    LBRACE: "{"
    RBRACE: "}"
    LSQB: "["
    RSQB: "]"
    DOT: "."
    AT: "@"
    HASH: "#"

    WS: /[^\S\n]+/
    %ignore WS
"""
