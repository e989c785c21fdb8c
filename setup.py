"""CryptoVote setup script.

Options:                python setup.py --help
Install by admin/root:  python setup.py install
Install by user:        python setup.py install --user
Install for testing:    pip install -e .[test]
"""

from setuptools import setup
import cryptovote

with open('README.md', 'r') as f:
    LONG_DESCRIPTION = f.read()

setup(
    name='cryptovote',
    version=cryptovote.__version__,
    description='CryptoVote -- AES, DES and Paillier for privacy-preserving tallies in Python',
    long_description=LONG_DESCRIPTION,
    long_description_content_type='text/markdown',
    keywords=['crypto', 'cryptography', 'AES', 'DES', 'CBC', 'Paillier',
              'homomorphic encryption', 'electronic voting', 'tally'],
    classifiers=[
        'Development Status :: 3 - Alpha',
        'Environment :: Console',
        'Intended Audience :: Developers',
        'Intended Audience :: Education',
        'Intended Audience :: Science/Research',
        'License :: OSI Approved :: MIT License',
        'Operating System :: OS Independent',
        'Programming Language :: Python :: 3 :: Only',
        'Topic :: Security :: Cryptography',
        'Topic :: Software Development :: Libraries :: Python Modules'
    ],
    license=cryptovote.__license__,
    packages=['cryptovote'],
    platforms=['any'],
    python_requires='>=3.9',
    install_requires=['gmpy2>=2.1'],
    extras_require={'test': ['pytest']}
)
