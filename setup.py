from setuptools import setup, find_packages

setup(
    name='ledgerprint',
    version='0.0.1',
    python_requires='>=3.10',
    install_requires=[
        'pandas',
        'pyyaml',
        'pytest',
        'consistent_df @ https://github.com/macxred/consistent_df/tarball/main'
    ],
    description=('Render flat balance and register reports from a double '
                 'entry accounting ledger.'),
    long_description=open('README.md').read(),
    packages=find_packages(),
    extras_require={
        "dev": [
            "flake8",
            "bandit",
        ]
    }
)
