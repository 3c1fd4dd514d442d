from setuptools import setup, find_packages

setup(
    name="membercard",
    version="0.1.0",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    package_data={"membercard": ["py.typed"]},
    python_requires=">=3.10",
    install_requires=[
        'requests>=2.31.0',
        'PyYAML>=6.0',
        'typing_extensions>=4.5.0'
    ],
    extras_require={
        'test': [
            'pytest>=7.4.0'
        ]
    }
)
