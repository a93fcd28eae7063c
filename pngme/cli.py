'''
Hide secret messages into PNG files.

 $ pngme encode image.png ruSt 'this is a secret'
 $ pngme decode image.png ruSt
 $ pngme remove image.png ruSt
 $ pngme print image.png

Set the environment variable DEBUG to see what happens during the parsing.
'''
import argparse
import logging
import os
import sys
from pathlib import Path

from .exceptions import PNGmeException
from .images.png import PNG_SIGNATURE
from .images.png.utils import (
    encode_message,
    decode_message,
    remove_message,
    iter_chunks_description,
)


logger = logging.getLogger(__name__)


def read_file(path, create=False):
    path = Path(path)

    if create and not path.exists():
        logger.info(f'\'{path}\' does not exist, starting from an empty PNG')
        return PNG_SIGNATURE

    return path.read_bytes()


def cmd_encode(args):
    data = read_file(args.path, create=True)
    output = args.output or args.path

    Path(output).write_bytes(encode_message(data, args.chunk, args.message))


def cmd_decode(args):
    print(decode_message(read_file(args.path), args.chunk))


def cmd_remove(args):
    data, chunk = remove_message(read_file(args.path), args.chunk)

    Path(args.path).write_bytes(data)

    print(f'removed {chunk}')


def cmd_print(args):
    for line in iter_chunks_description(read_file(args.path)):
        print(line)


def get_parser():
    parser = argparse.ArgumentParser(prog='pngme', description='encode and decode secret messages in PNG files')
    subparsers = parser.add_subparsers(dest='command', required=True)

    encode = subparsers.add_parser('encode', help='append a chunk with a message')
    encode.add_argument('path')
    encode.add_argument('chunk', help='type of the chunk, 4 ASCII letters')
    encode.add_argument('message')
    encode.add_argument('output', nargs='?', help='where to save the result (default: overwrite path)')
    encode.set_defaults(func=cmd_encode)

    decode = subparsers.add_parser('decode', help='print the message of the first chunk with the given type')
    decode.add_argument('path')
    decode.add_argument('chunk')
    decode.set_defaults(func=cmd_decode)

    remove = subparsers.add_parser('remove', help='remove the first chunk with the given type')
    remove.add_argument('path')
    remove.add_argument('chunk')
    remove.set_defaults(func=cmd_remove)

    print_ = subparsers.add_parser('print', help='list the chunks of the file')
    print_.add_argument('path')
    print_.set_defaults(func=cmd_print)

    return parser


def main(argv=None):
    logging.basicConfig(level=logging.DEBUG if 'DEBUG' in os.environ else logging.INFO)

    args = get_parser().parse_args(argv)

    try:
        args.func(args)
    except (PNGmeException, OSError) as e:
        logger.error(f'{args.command} failed for \'{args.path}\': {e}')
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
