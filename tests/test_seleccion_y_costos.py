import unittest

from core.configuracion import ParametrosCotizacion
from core.contrato import FactoresEficiencia
from core.errores import NoSuitableEquipmentError, ValidationError
from electrical.catalogos import Inversor, Panel
from electrical.energia.produccion import estimar_produccion, perfil_mensual
from electrical.estimador import (
    dividir_consumo,
    estimar_costos,
    longitud_cable_m,
    recomendar_bateria,
    resumen_techo,
)
from electrical.seleccion_equipos import n_inversores, n_paneles, seleccionar_equipos


PANELES = [
    Panel(id="p450", marca="Canadian", potencia_w=450, precio=31000),
    Panel(id="p550", marca="Longi", potencia_w=550, precio=38500, default_choice=True),
    Panel(id="p580", marca="Jinko", potencia_w=580, precio=42000),
]

INVERSORES = [
    Inversor(id="i5", marca="Growatt", potencia_kw=5, precio=115000),
    Inversor(id="i6", marca="Solis", potencia_kw=6, precio=135000),
    Inversor(id="i10", marca="Huawei", potencia_kw=10, precio=185000),
]


class TestSeleccionEquipos(unittest.TestCase):
    def setUp(self):
        self.params = ParametrosCotizacion()

    def test_conteos(self):
        self.assertEqual(11, n_paneles(6.0, 550))
        self.assertEqual(10, n_paneles(5.5, 550))
        self.assertEqual(1, n_inversores(6.0, 6))
        with self.assertRaises(ValueError):
            n_paneles(6.0, 0)

    def test_panel_default_e_inversor_mas_barato_suficiente(self):
        eq = seleccionar_equipos(tamano_kw=6.0, paneles=PANELES, inversores=INVERSORES, params=self.params)
        self.assertEqual("p550", eq.panel_seleccionado.id)
        self.assertEqual("i6", eq.inversor_seleccionado.id)
        # el de 5 kW no alcanza
        self.assertEqual(["i6", "i10"], [o.id for o in eq.inversores])
        self.assertEqual(3, len(eq.paneles))

    def test_sin_default_elige_el_mas_barato(self):
        sin_default = [Panel(id=p.id, marca=p.marca, potencia_w=p.potencia_w, precio=p.precio) for p in PANELES]
        eq = seleccionar_equipos(tamano_kw=6.0, paneles=sin_default, inversores=INVERSORES, params=self.params)
        # 14 × 31000 = 434000 vs 11 × 38500 = 423500 vs 11 × 42000
        self.assertEqual("p550", eq.panel_seleccionado.id)

    def test_empate_respeta_orden_de_catalogo(self):
        invs = [
            Inversor(id="b", marca="B", potencia_kw=8, precio=150000),
            Inversor(id="a", marca="A", potencia_kw=8, precio=150000),
        ]
        eq = seleccionar_equipos(tamano_kw=6.0, paneles=PANELES, inversores=invs, params=self.params)
        self.assertEqual("b", eq.inversor_seleccionado.id)

    def test_override_por_id(self):
        eq = seleccionar_equipos(
            tamano_kw=6.0, paneles=PANELES, inversores=INVERSORES, params=self.params,
            panel_id="p580", inversor_id="i10",
        )
        self.assertEqual("p580", eq.panel_seleccionado.id)
        self.assertEqual("i10", eq.inversor_seleccionado.id)

    def test_override_invalido(self):
        with self.assertRaises(ValidationError) as cm:
            seleccionar_equipos(
                tamano_kw=6.0, paneles=PANELES, inversores=INVERSORES, params=self.params, inversor_id="i5",
            )
        self.assertEqual("inverterId", cm.exception.campo)

    def test_sin_inversor_suficiente(self):
        with self.assertRaises(NoSuitableEquipmentError) as cm:
            seleccionar_equipos(tamano_kw=12.0, paneles=PANELES, inversores=INVERSORES, params=self.params)
        self.assertIn("12kW", str(cm.exception))


class TestCostosYProduccion(unittest.TestCase):
    def setUp(self):
        self.params = ParametrosCotizacion()
        self.eq = seleccionar_equipos(tamano_kw=6.0, paneles=PANELES, inversores=INVERSORES, params=self.params)

    def test_longitud_cable(self):
        self.assertEqual(18, longitud_cable_m(19.8))
        self.assertEqual(0, longitud_cable_m(0))
        self.assertEqual(4, longitud_cable_m(1.0))

    def test_total_es_suma_de_terminos(self):
        c = estimar_costos(panel=self.eq.panel_seleccionado, inversor=self.eq.inversor_seleccionado, params=self.params)
        terminos = [c.paneles, c.inversor, c.cable_dc, c.cable_ac, c.montaje, c.instalacion, c.net_metering, c.transporte]
        self.assertEqual(sum(terminos), c.total)
        self.assertEqual(18, c.longitud_cable_m)
        self.assertEqual(25000, c.instalacion)
        self.assertEqual(50000, c.net_metering)
        self.assertEqual(15000, c.transporte)

    def test_cableado_sale_del_panel_seleccionado(self):
        eq = seleccionar_equipos(
            tamano_kw=6.0, paneles=PANELES, inversores=INVERSORES, params=self.params, panel_id="p450",
        )
        c = estimar_costos(panel=eq.panel_seleccionado, inversor=eq.inversor_seleccionado, params=self.params)
        # 14 paneles × 1.8 m2 = 25.2 m2 => ceil(5.0199 × 4) = 21 m
        self.assertEqual(21, c.longitud_cable_m)
        self.assertEqual(14 * 8000, c.montaje)

    def test_division_de_consumo(self):
        c = dividir_consumo(600, self.params)
        self.assertEqual(252, c.pico_kwh)
        self.assertEqual(348, c.fuera_pico_kwh)
        self.assertEqual("6:00 PM - 9:00 PM", c.pico_horario)

        c = dividir_consumo(333, self.params)
        self.assertEqual(140, c.pico_kwh)
        self.assertEqual(193, c.fuera_pico_kwh)

    def test_pico_redondea_mitades_hacia_arriba(self):
        # 25 × 42% = 10.5 y 125 × 42% = 52.5
        c = dividir_consumo(25, self.params)
        self.assertEqual(11, c.pico_kwh)
        self.assertEqual(14, c.fuera_pico_kwh)

        c = dividir_consumo(125, self.params)
        self.assertEqual(53, c.pico_kwh)
        self.assertEqual(72, c.fuera_pico_kwh)

    def test_bateria(self):
        b = recomendar_bateria(600, self.params)
        self.assertAlmostEqual(180.0, b.capacidad_kwh)
        self.assertAlmostEqual(120000.0, b.costo_estimado)
        self.assertEqual(1, b.autonomia_dias)
        self.assertEqual(10, b.vida_anios)

    def test_produccion(self):
        p = estimar_produccion(
            tamano_kw=6.0,
            produccion_diaria_por_kw=4.0,
            produccion_mensual_por_kw=122.0,
            irradiancia=5.3,
            params=self.params,
        )
        self.assertAlmostEqual(24.0, p.diaria_kwh)
        self.assertAlmostEqual(732.0, p.mensual_kwh)
        self.assertAlmostEqual(24.0 * 365, p.anual_kwh)
        self.assertEqual(12, len(p.por_mes_kwh))
        self.assertAlmostEqual(732.0 * 0.85, p.por_mes_kwh[0])
        self.assertAlmostEqual(732.0 * 1.15, p.por_mes_kwh[4])

    def test_perfil_requiere_12_valores(self):
        with self.assertRaises(ValueError):
            perfil_mensual(100.0, [1.0] * 11)

    def test_resumen_techo(self):
        factores = FactoresEficiencia(
            eficiencia_sistema=0.72, irradiancia=5.3, orientacion=1.0, techo=0.96,
            sombreado=0.95, temperatura=0.91, inversor=0.96,
        )
        t = resumen_techo(self.eq.panel_seleccionado, factores, "south")
        self.assertAlmostEqual(19.8, t.area_requerida_m2)
        self.assertAlmostEqual(96.0, t.eficiencia_layout_pct)
        self.assertAlmostEqual(5.0, t.impacto_sombra_pct)


if __name__ == "__main__":
    unittest.main()
