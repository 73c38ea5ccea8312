from .parsers import CsvParser, Parser, ProblemSourceError, load_problems, parse_records

__all__ = ["CsvParser", "Parser", "ProblemSourceError", "load_problems", "parse_records"]
