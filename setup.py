from setuptools import setup
from os import path

here = path.abspath(path.dirname(__file__))

# Get the long description from the README file
with open(path.join(here, 'README.rst'), encoding='utf-8') as f:
    long_description = f.read()

setup(
    name='sgsip',
    version='1.0',
    description='SIP socket address and URI decoder',
    long_description=long_description,
    platforms=['posix',],
    python_requires='>=3.8',
    classifiers=[  # Optional
        'Development Status :: 5 - Production/Stable',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: MIT License',
        'Operating System :: OS Independent',
        'Programming Language :: Python :: 3',
    ],
    keywords='SIP URI parsing',
    packages=['sgsip'],
    install_requires=['pyparsing>=3.0'],
    extras_require={'test': ['pytest']},
)
