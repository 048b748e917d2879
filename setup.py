import setuptools

setuptools.setup(
    name="bplus-parser",
    version="0.1.0",
    license="MIT License",
    author="ethframe",
    description="Parser combinators over persistent symbol streams",
    package_dir={"": "src"},
    packages=setuptools.find_packages("src"),
    python_requires=">=3.7",
    install_requires=["typing_extensions"],
    extras_require={
        "test": ["pytest"],
        "bench": ["pyperf"],
    },
    zip_safe=False,
)
