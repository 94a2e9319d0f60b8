import setuptools

def readme():
    with open('README.md', 'r') as f:
        return f.read()

setuptools.setup(
    name='setup_check',
    version='0.1.0',
    description='Installed package report and file list checker for Cygwin-style setup databases',
    long_description=readme(),
    long_description_content_type='text/markdown',
    packages=setuptools.find_packages(exclude=['tests']),
    include_package_data=True,
    license='GPL-2+',
    classifiers=[
        'Programming Language :: Python :: 3',
        'License :: OSI Approved :: GNU General Public License v2 or later (GPLv2+)'
    ],
    python_requires='>=3.4',
    install_requires=[
        'appdirs'
    ],
    extras_require={
        'test': ['pytest>=7']
    },
    entry_points={
        'console_scripts': [
            'setup-check=setup_check.__main__:main'
        ]
    }
)
