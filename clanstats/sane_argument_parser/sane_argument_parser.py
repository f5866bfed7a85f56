"""Extend functionality of ArgumentParser class"""
import argparse

from clanstats.models import ClanTag, Season

class SaneArgumentParser(argparse.ArgumentParser):
    """
    Argument parser for which arguments are required on the CLI unless:
      - required=False is provided
        and/or
      - a default value is provided that is not None.
    """
    def add_argument(self, *args, default=None, **kwargs):
        if default is None and args and args[0].startswith("-"):
            # Tentatively make this option required
            kwargs.setdefault("required", True)
        return super().add_argument(*args, **kwargs, default=default)

    @classmethod
    def non_negative_int(cls, value):
        """
        Check if the value is a non negative integer.
        """
        ivalue = int(value)
        if ivalue < 0:
            raise argparse.ArgumentTypeError(f"{value} is an invalid non negative int value")
        return ivalue

    @classmethod
    def comma_list(cls, value):
        """
        Split a comma separated value, as used in environment variables.
        """
        if isinstance(value, list):
            return value
        return [item.strip() for item in value.split(",") if item.strip()]

    @classmethod
    def clan_tag(cls, value):
        try:
            return ClanTag(value)
        except ValueError as ve:
            raise argparse.ArgumentTypeError(str(ve)) from ve

    @classmethod
    def season(cls, value):
        try:
            return Season.parse(value)
        except ValueError as ve:
            raise argparse.ArgumentTypeError(str(ve)) from ve
