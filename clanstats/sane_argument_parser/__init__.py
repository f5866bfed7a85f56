from clanstats.sane_argument_parser.sane_argument_parser import SaneArgumentParser

__all__ = ["SaneArgumentParser"]
