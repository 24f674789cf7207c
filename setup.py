#
# (c) Copyright 2022 by Coinkite Inc. This file is covered by license found in COPYING-CC.
#
#
# Registry of CBOR records for air-gapped signing devices
#

# To use this command to install and yet be able to edit the code (here). Great for dev:
#
#   pip install --editable .
#
# with cli dependencies
#
#   pip install --editable '.[cli]'
#
# with test dependencies
#
#   pip install --editable '.[test]'
#
#
import re
from setuptools import setup

# read version without importing package (cbor2 may not be installed yet)
with open("urreg/__init__.py", "r") as fh:
    __version__ = re.search(r"^__version__ = '([^']+)'", fh.read(), re.M).group(1)

# these minimum versions are tested, some earlier values would probably work too.
requirements = [
    'cbor2>=5.4.1',
]

cli_requirements = [
    'click>=8.0.3',
]

test_requirements = [
    'pytest',
] + cli_requirements

with open("README.md", "r") as fh:
    long_description = fh.read()

setup(
    name='urreg',
    version=__version__,
    packages=[ 'urreg' ],
    python_requires='>3.6.0',
    install_requires=requirements,
    extras_require={
        'cli': cli_requirements,
        'test': test_requirements,
    },
    description="CBOR sign request and signature records for air-gapped signing devices",
    long_description=long_description,
    long_description_content_type="text/markdown",
    entry_points='''
        [console_scripts]
        urreg=urreg.cli:main
    ''',
    classifiers=[
        'Operating System :: POSIX :: Linux',
        'Operating System :: Microsoft :: Windows',
        'Operating System :: MacOS :: MacOS X',
    ],
)
