from lispcore.reader.parser import lex, TokenStream, parse_atom, read, read_all

__all__ = ["lex", "TokenStream", "parse_atom", "read", "read_all"]
