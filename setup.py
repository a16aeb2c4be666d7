from setuptools import find_packages, setup

package_name = 'deltabot_kinematics'

setup(
    name=package_name,
    version='1.0.0',
    packages=find_packages(exclude=['test']),
    python_requires='>=3.9',
    install_requires=[
        'setuptools',
        'numpy',
        'scipy',
    ],
    zip_safe=True,
    maintainer='deltabot_kinematics developers',
    description='Inverse kinematics and build volume constraints for linear delta 3D printers',
    license='GPL-3.0-or-later',
    extras_require={
        'test': [
            'pytest',
        ],
    },
)
