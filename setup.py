#!/usr/bin/env python
# -*- encoding: utf-8 -*-

from os.path import basename, dirname, join, splitext
from glob import glob
from setuptools import setup, find_packages

def read(*names, encoding='utf8'):
    return open(join(dirname(__file__), *names), encoding=encoding).read()

setup(name='mailchimp-api-v3',
      version='0.1.0',
      license='MIT',
      description='Client for the MailChimp API v3 lists, members and tags',
      long_description=read('README.rst'),
      author='1up',
      url='https://github.com/1up-lab/mailchimp-api-v3',
      packages=find_packages('src'),
      package_dir={'': 'src'},
      py_modules=[splitext(basename(path))[0] for path in glob('src/*.py')],
      include_package_data=True,
      zip_safe=False,
      python_requires='>=3.6',
      classifiers=[
          # complete classifier list:
          # http://pypi.python.org/pypi?%3Aaction=list_classifiers
          'Development Status :: 3 - Alpha',
          'Intended Audience :: Developers',
          'Environment :: Console',
          'License :: OSI Approved :: MIT License',
          'Programming Language :: Python',
          'Programming Language :: Python :: 3',
          'Topic :: Communications :: Email'
      ],
      keywords=['mailchimp'],
      install_requires=['python-dateutil',
                        'requests',
                        'singer-python'],
      extras_require={'test': ['pytest',
                               'responses']},
      entry_points={'console_scripts': ['mailchimp-api-v3 = mailchimp_api_v3:main']})
