from .version import __version__ as __version__

__title__ = "blockstream"
__description__ = "Streaming reader and writer adapters for block-cipher modes."
__author__ = "Saudade Z"
__email__ = "saudadez217@gmail.com"
__license__ = "Apache-2.0"
