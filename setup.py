#!/usr/bin/env python
from setuptools import setup, find_packages
from treeutil import __version__


with open('README.md') as fh:
    long_description = fh.read()


setup_args = dict(
    name='django-treeutil',
    version=__version__,
    author='django-treeutil contributors',
    license='Apache License 2.0',
    packages=find_packages(exclude=['docs', 'tests', 'tests.*']),
    include_package_data=True,
    description='Node lookup, selection folding and conversions for trees '
                'of plain dicts',
    long_description=long_description,
    long_description_content_type='text/markdown',
    python_requires='>=3.11',
    install_requires=['Django>=4.2'],
    extras_require={
        'test': [
            'pytest>=7.0',
            'pytest-django>=4.5',
        ],
    },
    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: Apache Software License',
        'Environment :: Web Environment',
        'Framework :: Django',
        'Framework :: Django :: 4.2',
        'Framework :: Django :: 5.0',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
        'Operating System :: OS Independent',
        'Topic :: Software Development :: Libraries',
        'Topic :: Utilities'])


if __name__ == '__main__':
    setup(**setup_args)
