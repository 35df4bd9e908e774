from setuptools import setup, find_packages

with open('requirements.txt') as f:
    requirements = f.read().splitlines()

setup(
    name='bn-inference',
    version='1.0.0',
    description='Exact and sampling-based inference over discrete Bayesian networks',
    license='Apache License 2.0',
    packages=find_packages(where='src'),
    package_dir={'': 'src'},
    python_requires='>=3.10',
    install_requires=requirements,
    extras_require={'test': ['pytest', 'parameterized']},
)
