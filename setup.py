""" A setuptools-based setup module. """

from setuptools import setup, find_packages
from os import path

here = path.abspath(path.dirname(__file__))

# Get the long description from the README file
with open(path.join(here, 'README.md'), encoding='utf-8') as f:
    long_description = f.read()

setup(
    name='spendplan', # Required

    # Versions should comply with PEP 440:
    # https://www.python.org/dev/peps/pep-0440/
    version='0.0.1a1',  # Required

    # A one-line description of what this project does.
    description='A planner for scheduling purchases against projected '
                'in-game currency income',  # Optional

    # An optional longer description of the project. This is the same
    # as the README.
    long_description=long_description,  # Optional

    # The README is in Markdown. Valid values are:
    # text/plain, text/x-rst, and text/markdown
    long_description_content_type='text/markdown',  # Optional

    # My name.
    author='Christopher Scott',  # Optional

    # For a list of valid classifiers, see https://pypi.org/classifiers/
    classifiers=[  # Optional
        # How mature is this project? Common values are
        #   3 - Alpha
        #   4 - Beta
        #   5 - Production/Stable
        'Development Status :: 3 - Alpha',

        'Intended Audience :: End Users/Desktop',
        'Topic :: Games/Entertainment',
        'Topic :: Software Development :: Libraries',

        'License :: Other/Proprietary License',

        'Programming Language :: Python :: 3',

        'Natural Language :: English'
    ],

    # This field adds keywords for your project which will appear on the
    # project page. What does your project relate to?
    keywords='planning timeline currency scheduling',  # Optional

    packages=find_packages(
        exclude=['contrib', 'docs', 'tests', 'tests.*']),  # Required

    # Default settings are read from this file at runtime.
    package_data={  # Optional
        'spendplan': ['data/settings.json'],
    },

    # This field lists other packages that your project depends on to run.
    # Any package you put here will be installed by pip when your project is
    # installed, so they must be valid existing projects.
    install_requires=[
        'python-dateutil>=2.7.3',
        'networkx>=2.3',
        'numpy>=1.16'
    ],  # Optional

    # List additional groups of dependencies here (e.g. development
    # dependencies).
    extras_require={  # Optional
        'doc': ['sphinx'],
        'test': ['pytest']
    },
)
