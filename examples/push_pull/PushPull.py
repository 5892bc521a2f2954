"""Strain controlled push-pull test of a J2 plastic material point."""

from matplotlib import pyplot as plt

from materialdriver import Increments
from materialdriver import LoadingPath
from materialdriver.MaterialPoint import MaterialPoint
from materialdriver.material import J2Plastic


E = 200.0e3
nu = 0.3
Y0 = 250.0
properties = {"elastic modulus": E,
              "poisson ratio": nu,
              "yield strength": Y0,
              "hardening model": "voce",
              "saturation strength": 400.0,
              "reference plastic strain": 0.005,
              "kinematic hardening modulus": 10.0e3}
materialPoint = MaterialPoint(J2Plastic.create_material_model_functions(properties))

strainAmplitude = 5e-3
steps = LoadingPath.make_cyclic_steps(LoadingPath.UNIAXIAL, strainAmplitude, dt=1.0,
                                      stepsPerRamp=25, numCycles=3)


if __name__ == "__main__":
    history = LoadingPath.run(materialPoint, steps, Increments.get_settings(tol=1e-10))

    fig, (ax1, ax2) = plt.subplots(2, 1, figsize=(8.5, 11))

    ax1.plot(history.strainHistory[:,0,0], history.stressHistory[:,0])
    ax1.set_xlabel("Axial strain [-]")
    ax1.set_ylabel("Axial stress [MPa]")

    ax2.plot(history.time, history.internalVariableHistory[:,J2Plastic.EQPS])
    ax2.set_xlabel("Time [s]")
    ax2.set_ylabel("Equivalent plastic strain")

    plt.savefig("push_pull.pdf")
