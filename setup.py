"""
Packaging for the clusterix DX cluster client.

    pip install -e .[test]
    pytest src
"""

from setuptools import setup

setup(
    name='clusterix',
    version='0.0.1',
    description='A resilient client for the telnet interface of amateur radio DX clusters.',
    url='',
    author='',
    author_email='',
    license='LGPL',
    package_dir={'': 'src'},
    packages=['clusterix', 'clusterix.conduit', 'clusterix.config', 'clusterix.connector', 'clusterix.hamradio',
              'clusterix.protocol', 'clusterix.support'],
    python_requires='>=3.7',
    install_requires=[
        'configobj',
    ],
    extras_require={
        'test': ['pytest', 'PyHamcrest', 'timeout-decorator'],
    },
    entry_points={
        'console_scripts': ['clusterix=clusterix.cli:main'],
    },
    zip_safe=False,
)
