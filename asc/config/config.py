"""
Static configuration data for the AScript compiler.
This includes the keyword list, operator groupings per precedence level,
friendly token names for error messages and the file extensions of a build.
"""

KEYWORDS = ["let", "if", "else", "while", "function", "return", "true", "false", "print", "import"]

SOURCE_EXTENSION = ".as"
OUTPUT_EXTENSION = ".js"
CONFIG_FILE_NAME = "asconfig.json"

# Binary operators by precedence level, lowest first. Every level is left-associative.
LOGICAL_OR_OPERATORS = {"OR"}
LOGICAL_AND_OPERATORS = {"AND"}
EQUALITY_OPERATORS = {"EQUALS", "NOT_EQUALS"}
RELATIONAL_OPERATORS = {"GT", "GTE", "LT", "LTE"}
ADDITIVE_OPERATORS = {"PLUS", "MINUS"}
MULTIPLICATIVE_OPERATORS = {"MULTIPLY", "DIVIDE", "MODULO"}

OPERATOR_SYMBOLS = {
    "OR": "||",
    "AND": "&&",
    "EQUALS": "==",
    "NOT_EQUALS": "!=",
    "GT": ">",
    "GTE": ">=",
    "LT": "<",
    "LTE": "<=",
    "PLUS": "+",
    "MINUS": "-",
    "MULTIPLY": "*",
    "DIVIDE": "/",
    "MODULO": "%",
}

FRIENDLY_TOKEN_NAMES = {
    "NUMBER": "a number",
    "STRING": "a string in double quotes",
    "TRUE": "the 'true' keyword",
    "FALSE": "the 'false' keyword",
    "IDENTIFIER": "a variable or function name",
    "LET": "the 'let' keyword",
    "IF": "the 'if' keyword",
    "ELSE": "the 'else' keyword",
    "WHILE": "the 'while' keyword",
    "FUNCTION": "the 'function' keyword",
    "RETURN": "the 'return' keyword",
    "PRINT": "the 'print' keyword",
    "IMPORT": "the 'import' keyword",
    "EQUALS": "an equality sign '=='",
    "NOT_EQUALS": "an inequality sign '!='",
    "GTE": "a '>=' sign",
    "LTE": "a '<=' sign",
    "AND": "a logical and '&&'",
    "OR": "a logical or '||'",
    "ASSIGN": "an equals sign '='",
    "GT": "a '>' sign",
    "LT": "a '<' sign",
    "PLUS": "a plus sign '+'",
    "MINUS": "a minus sign '-'",
    "MULTIPLY": "a multiplication sign '*'",
    "DIVIDE": "a division sign '/'",
    "MODULO": "a modulo sign '%'",
    "LPAREN": "an opening parenthesis '('",
    "RPAREN": "a closing parenthesis ')'",
    "LBRACE": "an opening brace '{'",
    "RBRACE": "a closing brace '}'",
    "SEMICOLON": "a semicolon ';'",
    "COMMA": "a comma ','",
    "EOF": "the end of the file",
}
