from setuptools import setup, find_packages

setup(
    name='recon-lang',
    version='0.1.0',
    py_modules=['recon', 'interpreter'],
    packages=find_packages(exclude=['tests', 'tests.*']),
    install_requires=[
        'lark>=1.1.5',
        'pydantic>=2',
    ],
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': [
            'recon = recon:main',
        ],
    },
)
