import copy
import unittest

from core.result_accessors import (
    as_float,
    as_int,
    get_annual_production,
    get_costs,
    get_panel_count,
    get_production_by_month,
    get_selected_inverter,
    get_selected_panel,
    get_system_size,
    get_total_cost,
)
from core.modelo import SizingInput
from core.rutas import kw, money_PKR, num, redondear
from core.sizing import calcular_sizing_unificado
from electrical.catalogos import CatalogoEnMemoria, Inversor, Panel


def _catalogo() -> CatalogoEnMemoria:
    return CatalogoEnMemoria(
        paneles=[Panel(id="p550", marca="Longi", potencia_w=550, precio=38500, default_choice=True)],
        inversores=[
            Inversor(id="i5", marca="Growatt", potencia_kw=5, precio=115000),
            Inversor(id="i6", marca="Solis", potencia_kw=6, precio=135000),
        ],
    )


class TestResultAccessors(unittest.TestCase):
    def test_res_parcial_no_revienta_y_tipos(self):
        res = {}
        self.assertIsInstance(get_system_size(res), float)
        self.assertIsInstance(get_costs(res), dict)
        self.assertIsInstance(get_total_cost(res), float)
        self.assertIsInstance(get_selected_panel(res), dict)
        self.assertIsInstance(get_selected_inverter(res), dict)
        self.assertIsInstance(get_panel_count(res), int)
        self.assertIsInstance(get_production_by_month(res), list)
        self.assertIsInstance(get_annual_production(res), float)

    def test_no_muta_res(self):
        res = {
            "systemSize": 6.0,
            "costs": {"panels": 423500, "total": 749100},
            "equipment": {"selectedPanel": {"count": 11}, "selectedInverter": {"id": "i6"}},
            "production": {"byMonth": [500] * 12, "annual": 8351},
        }
        before = copy.deepcopy(res)
        get_system_size(res)
        get_costs(res)["panels"] = 0
        get_selected_panel(res)["count"] = 0
        get_production_by_month(res)
        self.assertEqual(before, res)

    def test_valores_sucios(self):
        self.assertEqual(0.0, as_float("abc"))
        self.assertEqual(3, as_int("3.7"))
        res = {"systemSize": None, "production": {"byMonth": "no-lista"}}
        self.assertEqual(0.0, get_system_size(res))
        self.assertEqual([], get_production_by_month(res))

    def test_acepta_sizing_result(self):
        r = calcular_sizing_unificado(SizingInput(monthly_usage_kwh=600), fuente=_catalogo())
        self.assertEqual(6.0, get_system_size(r))
        self.assertEqual(11, get_panel_count(r))
        self.assertEqual("i6", get_selected_inverter(r)["id"])
        self.assertAlmostEqual(r.costos.total, get_total_cost(r))
        self.assertEqual(12, len(get_production_by_month(r)))


class TestFormato(unittest.TestCase):
    def test_money_pkr(self):
        self.assertEqual("Rs 749,100", money_PKR(749100))
        self.assertEqual("Rs 1,234.50", money_PKR(1234.5, 2))

    def test_redondear_mitades_hacia_arriba(self):
        self.assertEqual(3, redondear(2.5))
        self.assertEqual(11, redondear(10.5))
        self.assertEqual(1, redondear(0.5))
        self.assertEqual(2, redondear(2.4999))
        self.assertEqual(0.13, redondear(0.125, 2))
        self.assertIsInstance(redondear(7.0), int)

    def test_num_y_kw(self):
        self.assertEqual("8,351.7", num(8351.66, 1))
        self.assertEqual("6 kW", kw(6.0))
        self.assertEqual("7.3 kW", kw(7.3))


if __name__ == "__main__":
    unittest.main()
