from importlib import import_module
from setuptools import setup

with open('README.rst') as f:
    readme = f.read()

setup(
    name='evanesque',
    version=import_module('evanesque').__version__,
    description='A tiny, self-erasing stack language',
    long_description=readme,
    long_description_content_type='text/x-rst',
    packages=['evanesque'],
    include_package_data=True,
    install_requires=[
        'prompt_toolkit',
        'pygments',
        'pyserial',
    ],
    extras_require={
        'test': [
            'pytest',
        ],
    },
    classifiers=[
        'Development Status :: 4 - Beta',
        'Environment :: Console',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: MIT License',
        'Operating System :: OS Independent',
        'Programming Language :: Python :: 3',
        'Topic :: Software Development',
        'Topic :: Software Development :: Interpreters',
    ],
    python_requires='>=3.7',
    entry_points={
        'console_scripts': [
            'evanesque = evanesque.repl:cli_main',
        ],
    },
)
