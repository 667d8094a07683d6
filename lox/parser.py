import ply.yacc

from .ast       import *
from .lexer     import Lexer, literal
from .program   import Program
from .reporter  import Reporter, ErrorKind

MAX_ARGUMENTS = 255

class Parser:
    tokens      = Lexer.tokens
    start       = 'program'
    precedence  = (
        ('nonassoc' , 'IFX'                     ),
        ('nonassoc' , 'ELSE'                    ),
        ('right'    , 'EQ'                      ),
        ('left'     , 'OR'                      ),
        ('left'     , 'AND'                     ),
        ('left'     , 'BOOL_EQ', 'BOOL_NEQ'     ),
        ('left'     , 'BOOL_LT', 'BOOL_GT', 'BOOL_LEQ', 'BOOL_GEQ' ),
        ('left'     , 'PLUS', 'DASH'            ),
        ('left'     , 'STAR', 'SLASH'           ),
        ('right'    , 'UMINUS', 'BOOL_NOT'      ),
        ('left'     , 'LPAREN', 'DOT'           ),
    )


    def __init__(self, reporter: Reporter):
        self.reporter   = reporter
        self.lexer      = Lexer(self.reporter)
        self.parser     = ply.yacc.yacc(
            module          = self,
            debug           = False,
            write_tables    = False,
        )

    def parse(self, source: str) -> Program | None:
        self.lexer.reset(source)
        return self.parser.parse(source, lexer = self.lexer.lexer)

    def token(self, p, n) -> Token:
        tok = p.slice[n]
        return Token(
            kind        = tok.type,
            lexeme      = tok.value,
            literal     = literal(tok.type, tok.value),
            line        = tok.lineno,
        )

    def error(self, message: str, token: Token):
        self.reporter(message, token, kind = ErrorKind.SYNTAX)

    # ----------------------------------------------------------------
    # Expressions

    def p_name(self, p):
        """expr : IDENT"""
        p[0] = VarExpression(
            name        = self.token(p, 1),
            line        = p.lineno(1),
        )

    def p_this(self, p):
        """expr : THIS"""
        p[0] = ThisExpression(
            keyword     = self.token(p, 1),
            line        = p.lineno(1),
        )

    def p_number(self, p):
        """expr : NUMBER"""
        p[0] = LiteralExpression(
            value       = float(p[1]),
            line        = p.lineno(1),
        )

    def p_string(self, p):
        """expr : STRING"""
        p[0] = LiteralExpression(
            value       = p[1],
            line        = p.lineno(1),
        )

    def p_constant(self, p):
        """expr : TRUE
                | FALSE
                | NIL"""
        p[0] = LiteralExpression(
            value       = {'true': True, 'false': False, 'nil': None}[p[1]],
            line        = p.lineno(1),
        )

    def p_parentheses(self, p):
        """expr : LPAREN expr RPAREN"""
        p[0] = GroupingExpression(
            expression  = p[2],
            line        = p.lineno(1),
        )

    def p_unary_operation(self, p):
        """expr : DASH expr %prec UMINUS
                | BOOL_NOT expr"""
        p[0] = UnaryExpression(
            operator    = self.token(p, 1),
            right       = p[2],
            line        = p.lineno(1),
        )

    def p_binary_operation(self, p):
        """expr : expr PLUS     expr
                | expr DASH     expr
                | expr STAR     expr
                | expr SLASH    expr
                | expr BOOL_EQ  expr
                | expr BOOL_NEQ expr
                | expr BOOL_LT  expr
                | expr BOOL_LEQ expr
                | expr BOOL_GT  expr
                | expr BOOL_GEQ expr"""
        p[0] = BinaryExpression(
            left        = p[1],
            operator    = self.token(p, 2),
            right       = p[3],
            line        = p.lineno(2),
        )

    def p_logical_operation(self, p):
        """expr : expr AND expr
                | expr OR  expr"""
        p[0] = LogicalExpression(
            left        = p[1],
            operator    = self.token(p, 2),
            right       = p[3],
            line        = p.lineno(2),
        )

    def p_assignment(self, p):
        """expr : expr EQ expr"""
        match p[1]:
            case VarExpression(name):
                p[0] = AssignExpression(
                    name        = name,
                    value       = p[3],
                    line        = p.lineno(2),
                )
            case GetExpression(target, name):
                p[0] = SetExpression(
                    target      = target,
                    name        = name,
                    value       = p[3],
                    line        = p.lineno(2),
                )
            case _:
                self.error("Invalid assignment target.", self.token(p, 2))
                p[0] = p[3]

    def p_call(self, p):
        """expr : expr LPAREN RPAREN
                | expr LPAREN arguments RPAREN"""
        arguments = p[3] if len(p) == 5 else []
        if len(arguments) > MAX_ARGUMENTS:
            self.error(f"Can't have more than {MAX_ARGUMENTS} arguments.",
                       self.token(p, 2))
        p[0] = CallExpression(
            callee      = p[1],
            paren       = self.token(p, len(p) - 1),
            arguments   = tuple(arguments),
            line        = p.lineno(2),
        )

    def p_arguments(self, p):
        """arguments : expr
                     | arguments COMMA expr"""
        if len(p) == 2:
            p[0] = [p[1]]
        else:
            p[0] = p[1]
            p[0].append(p[3])

    def p_get(self, p):
        """expr : expr DOT IDENT"""
        p[0] = GetExpression(
            target      = p[1],
            name        = self.token(p, 3),
            line        = p.lineno(2),
        )

    # ----------------------------------------------------------------
    # Statements

    def p_expr_statement(self, p):
        """exprstmt : expr SEMICOLON"""
        p[0] = ExprStatement(
            expression  = p[1],
            line        = p.lineno(2),
        )

    def p_print(self, p):
        """print : PRINT expr SEMICOLON"""
        p[0] = PrintStatement(
            value       = p[2],
            line        = p.lineno(1),
        )

    def p_declaration(self, p):
        """vardecl : VAR IDENT SEMICOLON
                   | VAR IDENT EQ expr SEMICOLON"""
        p[0] = VarDeclStatement(
            name        = self.token(p, 2),
            init        = p[4] if len(p) == 6 else None,
            line        = p.lineno(1),
        )

    def p_block(self, p):
        """block : LBRACE stmts RBRACE"""
        p[0] = BlockStatement(
            body        = tuple(p[2]),
            line        = p.lineno(1),
        )

    def p_ifelse(self, p):
        """ifelse : IF LPAREN expr RPAREN stmt %prec IFX
                  | IF LPAREN expr RPAREN stmt ELSE stmt"""
        p[0] = IfStatement(
            condition   = p[3],
            iftrue      = p[5],
            iffalse     = p[7] if len(p) == 8 else None,
            line        = p.lineno(1),
        )

    def p_while(self, p):
        """while : WHILE LPAREN expr RPAREN stmt"""
        p[0] = WhileStatement(
            condition   = p[3],
            body        = p[5],
            line        = p.lineno(1),
        )

    def p_for(self, p):
        """for : FOR LPAREN forinit forcond SEMICOLON forstep RPAREN stmt"""
        # for loops are sugar over a block holding the initializer and
        # a while loop whose body runs the increment last
        line = p.lineno(1)
        body = p[8]

        if p[6] is not None:
            body = BlockStatement(
                body    = (body, ExprStatement(p[6], line = line)),
                line    = line,
            )

        condition = p[4]
        if condition is None:
            condition = LiteralExpression(True, line = line)

        body = WhileStatement(condition, body, line = line)

        if p[3] is not None:
            body = BlockStatement(body = (p[3], body), line = line)

        p[0] = body

    def p_forinit(self, p):
        """forinit : vardecl
                   | exprstmt
                   | SEMICOLON"""
        p[0] = p[1] if isinstance(p[1], Statement) else None

    def p_forclause(self, p):
        """forcond :
                   | expr
           forstep :
                   | expr"""
        p[0] = p[1] if len(p) == 2 else None

    def p_return(self, p):
        """return : RETURN SEMICOLON
                  | RETURN expr SEMICOLON"""
        p[0] = ReturnStatement(
            keyword     = self.token(p, 1),
            value       = p[2] if len(p) == 4 else None,
            line        = p.lineno(1),
        )

    def p_stmt(self, p):
        """stmt : exprstmt
                | print
                | block
                | ifelse
                | while
                | for
                | return"""
        p[0] = p[1]

    def p_stmt_error(self, p):
        """stmt : error SEMICOLON"""
        p[0] = None

    # ----------------------------------------------------------------
    # Declarations

    def p_function(self, p):
        """function : IDENT LPAREN RPAREN LBRACE stmts RBRACE
                    | IDENT LPAREN params RPAREN LBRACE stmts RBRACE"""
        params = p[3] if len(p) == 8 else []
        if len(params) > MAX_ARGUMENTS:
            self.error(f"Can't have more than {MAX_ARGUMENTS} parameters.",
                       params[MAX_ARGUMENTS])
        p[0] = FunDecl(
            name        = self.token(p, 1),
            params      = tuple(params),
            body        = tuple(p[len(p) - 2]),
            line        = p.lineno(1),
        )

    def p_params(self, p):
        """params : IDENT
                  | params COMMA IDENT"""
        if len(p) == 2:
            p[0] = [self.token(p, 1)]
        else:
            p[0] = p[1]
            p[0].append(self.token(p, 3))

    def p_fundecl(self, p):
        """fundecl : FUN function"""
        p[0] = p[2]

    def p_classdecl(self, p):
        """classdecl : CLASS IDENT LBRACE methods RBRACE"""
        p[0] = ClassDecl(
            name        = self.token(p, 2),
            methods     = tuple(p[4]),
            line        = p.lineno(1),
        )

    def p_methods(self, p):
        """methods :
                   | methods function"""
        if len(p) == 1:
            p[0] = []
        else:
            p[0] = p[1]
            p[0].append(p[2])

    def p_decl(self, p):
        """decl : vardecl
                | fundecl
                | classdecl
                | stmt"""
        p[0] = p[1]

    def p_stmts(self, p):
        """stmts :
                 | stmts decl"""
        if len(p) == 1:
            p[0] = []
        else:
            p[0] = p[1]
            if p[2] is not None:
                p[0].append(p[2])

    def p_program(self, p):
        """program : stmts"""
        p[0] = Program(tuple(p[1]), self.reporter)

    def p_error(self, p):
        if p:
            self.error("Unexpected token.", Token(p.type, p.value, None, p.lineno))
        else:
            self.error("Unexpected end of input.",
                       Token('EOF', '', None, self.lexer.lexer.lineno))
