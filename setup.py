import setuptools

with open('README.md', 'rt') as f:
    long_description = f.read()

setuptools.setup(
    name='qdfloat',
    version='0.0.0',
    description='double-double and quad-double floating point arithmetic, checked against MPFR',
    long_description=long_description,
    long_description_content_type='text/markdown',
    license='MIT',
    python_requires='>=3.8',
    install_requires=['numpy>=1.23.0', 'gmpy2>=2.1.2'],
    extras_require={
        'test': ['pytest>=7.0'],
    },
    packages=['qdfloat', 'qdfloat.core', 'qdfloat.arithmetic'],
    classifiers=[
        'Development Status :: 3 - Alpha',
        'Operating System :: POSIX :: Linux',
        'License :: OSI Approved :: MIT License',
    ],
)
