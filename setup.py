from setuptools import find_packages, setup

setup(
    name="saslprepare",
    use_scm_version={
        "write_to": "src/saslprepare/_version.py",
        "fallback_version": "0.1.0",
    },
    description="Character preparation (decomposition and canonical ordering) "
    "for SASL authentication",
    entry_points={
        "console_scripts": ["saslprepare=saslprepare.__main__:main"],
    },
    package_dir={"": "src"},
    packages=find_packages("src"),
    install_requires=[
        "unicodedata2>=15.0.0",
    ],
    setup_requires=["setuptools_scm"],
    extras_require={
        "test": ["pytest"],
    },
    python_requires=">=3.10",
    classifiers=[
        "Development Status :: 2 - Pre-Alpha",
        "Environment :: Console",
        "Intended Audience :: Developers",
        "Natural Language :: English",
        "Operating System :: OS Independent",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3",
        "Topic :: Security",
        "Topic :: Text Processing",
    ],
)
