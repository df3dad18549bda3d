from setuptools import find_packages, setup

with open("README.md", encoding="utf-8") as fh:
    long_description = fh.read()
with open("wpshortcode/semver.txt", encoding="utf-8") as fh:
    semver = fh.read().strip()
with open("requirements.txt", encoding="utf-8") as fh:
    install_requires = [x.strip() for x in fh.read().strip().split("\n") if len(x) and x[0].isalpha()]

setup(
    name="wpshortcode",
    version=semver,
    description="A parser for WordPress-style [shortcodes] embedded in text.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["wpshortcode", "wpshortcode.*"]),
    package_data={"wpshortcode": ["py.typed", "semver.txt", "shortcodes.kdl"]},
    include_package_data=True,
    install_requires=install_requires,
    extras_require={"test": ["pytest", "hypothesis"]},
    python_requires=">=3.9",
    classifiers=[
        "Development Status :: 5 - Production/Stable",
        "License :: Public Domain",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3.9",
        "Topic :: Text Processing :: Markup",
    ],
    entry_points={"console_scripts": ["wpshortcode = wpshortcode:main"]},
)
