import os
from setuptools import setup
VERSION = open(os.path.join(os.path.dirname(__file__),  'version')).read().strip()
setup(
    name='updatebot',
    version=VERSION,
    license='BSD3',
    packages=['updatebot'],
    install_requires=[
        'requests',
        'ConfigArgParse',
        'PyYAML',  # configargparse.YAMLConfigFileParser
    ],
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': ['updatebot=updatebot.__main__:run'],
    },
    data_files=[('.', ['version'])],
)
