"""SecSanta setup script.

Options:                python setup.py --help
Install by admin/root:  python setup.py install
Install by user:        python setup.py install --user
Install options:        python setup.py install --help
"""

from setuptools import setup
import secsanta

with open('README.md', 'r') as f:
    LONG_DESCRIPTION = f.read()

setup(
    name='secsanta',
    version=secsanta.__version__,
    description='SecSanta -- Decentralized Secret Santa from ElGamal mix-nets',
    long_description=LONG_DESCRIPTION,
    long_description_content_type='text/markdown',
    keywords=['crypto', 'cryptography', 'secret santa', 'derangement',
              'ElGamal', 'mix-net', 'shuffle'],
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
        'Topic :: Software Development :: Libraries :: Python Modules',
    ],
    license=secsanta.__license__,
    packages=['secsanta'],
    install_requires=['gmpy2>=2.1'],
    platforms=['any'],
    python_requires='>=3.9'
)
