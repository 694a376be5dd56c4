from setuptools import setup, find_packages

from lastpos import VERSION

setup(
    name     = 'lastpos',
    version  = VERSION,
    description = 'Remembers last edit position for every document and offers to jump back',
    long_description = open('README.rst').read(),
    zip_safe   = False,
    packages = find_packages(exclude=('tests', 'tests.*')),
    install_requires = ['chardet'],
    extras_require = {
        'gtk': ['PyGObject'],
        'test': ['pytest'],
    },
    include_package_data = True,
    classifiers = [
        "Programming Language :: Python",
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Development Status :: 4 - Beta",
        "Environment :: X11 Applications :: GTK",
        "Intended Audience :: Developers",
        "Intended Audience :: End Users/Desktop",
        "Natural Language :: English",
        "Topic :: Text Editors"
    ],
)
