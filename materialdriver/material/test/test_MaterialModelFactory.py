import unittest

from materialdriver.material import MaterialModelFactory
from materialdriver.material.MaterialModel import MaterialModel
from materialdriver.test.TestFixture import TestFixture


class MaterialModelFactoryFixture(TestFixture):
    def test_linear_elastic(self):
        props = {'elastic modulus': 200.0e3,
                 'poisson ratio': 0.3}
        model = MaterialModelFactory.material_model_factory('linear elastic', props)
        self.assertIsInstance(model, MaterialModel)
        self.assertEqual(model.compute_initial_state().size, 0)


    def test_j2_plastic_name_is_case_insensitive(self):
        props = {'elastic modulus': 200.0e3,
                 'poisson ratio': 0.3,
                 'yield strength': 100.0,
                 'hardening model': 'linear',
                 'hardening modulus': 1000.0}
        model = MaterialModelFactory.material_model_factory('J2Plastic', props)
        self.assertEqual(model.compute_initial_state().size, 10)


    def test_unknown_model_raises(self):
        with self.assertRaises(MaterialModelFactory.MaterialModelNameError):
            MaterialModelFactory.material_model_factory('neo-hookean', {})


if __name__ == '__main__':
    unittest.main()
