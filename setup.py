from setuptools import setup

setup(
    name='earclip',
    version='0.1',
    packages=['earclip', 'earclip.spatial'],
    install_requires=['numpy', 'shapely>=2.0'],
    extras_require={'test': ['pytest']},
    python_requires='>=3.8',
    license='MIT',
    description='Ear clipping triangulation of polygon rings',
    long_description=open('README.md').read(),
    long_description_content_type='text/markdown',
)
