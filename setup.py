# -*- coding: utf-8 -*-

from setuptools import setup

# So we get all the meta-information in one place (yay!) but we call
# exec to get it (boo!). We can't import pqsphinx._metadata here
# because that won't work when setup is being run by pip before the
# dependencies are installed.
with open('pqsphinx/_metadata.py') as f:
    exec(
        compile(f.read(), '_metadata.py', 'exec'),
        globals(),
        locals(),
    )

description = '''
    Post-quantum Sphinx mixnet crypto
'''

setup(
    name='pqsphinx',
    version=__version__,
    description=description,
    long_description=open('README.rst', 'r').read(),
    keywords=['python', 'mixnet', 'cryptography', 'anonymity', 'post-quantum'],
    install_requires=open('requirements.txt').readlines(),
    # "pip install -e .[dev]" will install development requirements
    extras_require=dict(
        dev=open('dev-requirements.txt').readlines(),
    ),
    classifiers=[
        'Intended Audience :: Developers',
        'License :: OSI Approved :: GNU Lesser General Public License v3 (LGPLv3)',
        'Topic :: Security :: Cryptography',
        'Programming Language :: Python :: 3',
    ],
    python_requires='>=3.9',
    author=__author__,
    author_email=__contact__,
    url=__url__,
    license=__license__,
    packages=["pqsphinx"],
)
