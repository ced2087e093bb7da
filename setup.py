from setuptools import setup, find_packages
import re

# Read version from babysteps/__init__.py
with open('babysteps/__init__.py') as f:
    version = re.search(r'^__version__ = ["\']([^"\']+)["\']', f.read(), re.MULTILINE).group(1)

setup(
    name='babysteps',
    version=version,
    packages=find_packages(exclude=['tests', 'tests.*']),
    package_data={
        'babysteps': ['data/holidays/*.yaml'],
    },
    install_requires=[
        'PyYAML>=6.0',
        'click>=8.0',
        'pydantic>=2.0.0',
        'python-dateutil>=2.8',
    ],
    extras_require={
        'mcp': [
            'mcp[cli]>=1.0.0,<2',
        ],
        'test': [
            'pytest>=7.0',
        ],
    },
    entry_points={
        'console_scripts': [
            'babysteps=babysteps.cli.__main__:main',
            'babysteps-mcp=babysteps.mcp.server:run_server',
        ],
    },
    author='Personal',
    description='Payment scheduling, income normalization and Universal Credit estimates.',
    python_requires='>=3.10',
)
