__version__ = '0.1.0'
__author__ = 'David Stainton'
__contact__ = 'dstainton415@gmail.com'
__url__ = 'https://github.com/applied-mixnetworks/sphinxmixcrypto'
__license__ = 'LGPLv3'
__copyright__ = 'Copyright 2016-2017 David Stainton'
