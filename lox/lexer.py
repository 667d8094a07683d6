import ply.lex
import re

from .ast       import Token
from .reporter  import Reporter, ErrorKind

class Lexer:
    keywords = {
        x: x.upper() for x in (
            'and'      ,
            'class'    ,
            'else'     ,
            'false'    ,
            'for'      ,
            'fun'      ,
            'if'       ,
            'nil'      ,
            'or'       ,
            'print'    ,
            'return'   ,
            'this'     ,
            'true'     ,
            'var'      ,
            'while'    ,
        )
    }

    tokens = (
        'IDENT' ,               # : str
        'NUMBER',               # : str, converted by the parser
        'STRING',               # : str, without the quotes

        # Punctuation
        'LPAREN'       ,
        'RPAREN'       ,
        'LBRACE'       ,
        'RBRACE'       ,
        'COMMA'        ,
        'DOT'          ,
        'SEMICOLON'    ,

        'DASH'         ,
        'EQ'           ,
        'PLUS'         ,
        'SLASH'        ,
        'STAR'         ,

        'BOOL_EQ'      ,
        'BOOL_NEQ'     ,
        'BOOL_LT'      ,
        'BOOL_LEQ'     ,
        'BOOL_GT'      ,
        'BOOL_GEQ'     ,
        'BOOL_NOT'     ,
    ) + tuple(keywords.values())

    t_LPAREN    = re.escape('(')
    t_RPAREN    = re.escape(')')
    t_LBRACE    = re.escape('{')
    t_RBRACE    = re.escape('}')
    t_COMMA     = re.escape(',')
    t_DOT       = re.escape('.')
    t_SEMICOLON = re.escape(';')

    t_DASH      = re.escape('-')
    t_EQ        = re.escape('=')
    t_PLUS      = re.escape('+')
    t_SLASH     = re.escape('/')
    t_STAR      = re.escape('*')

    t_BOOL_EQ   = re.escape('==')
    t_BOOL_NEQ  = re.escape('!=')
    t_BOOL_LT   = re.escape('<')
    t_BOOL_LEQ  = re.escape('<=')
    t_BOOL_GT   = re.escape('>')
    t_BOOL_GEQ  = re.escape('>=')
    t_BOOL_NOT  = re.escape('!')

    t_ignore = ' \t\r'          # Ignore all whitespaces
    t_ignore_comment = r'//[^\n]*'

    def __init__(self, reporter: Reporter):
        self.reporter = reporter
        self.lexer    = ply.lex.lex(module = self)

    def t_newline(self, t):
        r'\n+'
        t.lexer.lineno += len(t.value)

    def t_block_comment(self, t):
        r'/\*(.|\n)*?\*/'
        t.lexer.lineno += t.value.count('\n')

    def t_unterminated_comment(self, t):
        r'/\*(.|\n)*'
        self.reporter("Unterminated comment.", line = t.lexer.lineno,
                      kind = ErrorKind.LEXICAL)
        t.lexer.lineno += t.value.count('\n')

    def t_STRING(self, t):
        r'"[^"]*"'
        # the token keeps the line it starts on
        t.lexer.lineno += t.value.count('\n')
        t.value = t.value[1:-1]
        return t

    def t_unterminated_string(self, t):
        r'"[^"]*'
        self.reporter("Unterminated string.", line = t.lexer.lineno,
                      kind = ErrorKind.LEXICAL)
        t.lexer.lineno += t.value.count('\n')

    def t_NUMBER(self, t):
        r'\d+(\.\d+)?'
        return t

    def t_IDENT(self, t):
        r'[a-zA-Z_][a-zA-Z0-9_]*'
        if t.value in self.keywords:
            t.type  = self.keywords[t.value]
        return t

    def t_error(self, t):
        self.reporter("Unexpected character.", line = t.lexer.lineno,
                      kind = ErrorKind.LEXICAL)
        t.lexer.skip(1)

    def reset(self, source: str):
        self.lexer.lineno = 1
        self.lexer.input(source)

    def tokenize(self, source: str) -> list[Token]:
        """
        the whole token stream of `source`, closed by an EOF token
        """
        self.reset(source)

        tokens = []
        for tok in iter(self.lexer.token, None):
            tokens.append(Token(
                kind    = tok.type,
                lexeme  = tok.value if tok.type != 'STRING' else f'"{tok.value}"',
                literal = literal(tok.type, tok.value),
                line    = tok.lineno,
            ))
        tokens.append(Token('EOF', '', None, self.lexer.lineno))
        return tokens

def literal(kind: str, value: str):
    match kind:
        case 'NUMBER':
            return float(value)
        case 'STRING':
            return value
        case _:
            return None
