#!/usr/bin/env python3
"""
cli.py

Command-line interface for uploading performance traces to Flamedeck.
"""
import click

from flamedeck_upload import __version__
from flamedeck_upload.plugins.upload_plugin import plugin as upload_plugin


@click.group()
@click.version_option(__version__, prog_name="flamedeck")
def main():
    """
    Upload performance traces to Flamedeck.
    """


upload_plugin.register(main)

if __name__ == "__main__":
    main()
