import unittest
from unittest.mock import patch

from core.errores import NoSuitableEquipmentError, ValidationError
from core.modelo import SizingInput, Ubicacion
from core.orquestador import MENSAJE_ERROR_INTERNO, ejecutar_cotizacion, responder
from core.sizing import calcular_sizing_unificado
from electrical.catalogos import CatalogoEnMemoria, Inversor, Panel


def _catalogo() -> CatalogoEnMemoria:
    return CatalogoEnMemoria(
        paneles=[
            Panel(id="p550", marca="Longi", potencia_w=550, precio=38500, default_choice=True),
            Panel(id="p580", marca="Jinko", potencia_w=580, precio=42000),
        ],
        inversores=[
            Inversor(id="i5", marca="Growatt", potencia_kw=5, precio=115000),
            Inversor(id="i6", marca="Solis", potencia_kw=6, precio=135000),
            Inversor(id="i10", marca="Huawei", potencia_kw=10, precio=185000),
            Inversor(id="i15", marca="Sungrow", potencia_kw=15, precio=245000),
        ],
    )


class TestHappyPathCore(unittest.TestCase):
    def _payload(self, **extra):
        p = {
            "monthlyUsage": 600,
            "location": "Central Pakistan",
            "roofDirection": "south",
            "roofType": "standard",
            "shading": "minimal",
        }
        p.update(extra)
        return p

    def test_ejecutar_cotizacion_happy_path(self):
        res = ejecutar_cotizacion(self._payload(), fuente=_catalogo())

        for key in [
            "systemSize",
            "recommendedRange",
            "efficiencyFactors",
            "equipment",
            "costs",
            "roof",
            "battery",
            "production",
            "consumption",
            "weather",
            "metadata",
        ]:
            self.assertIn(key, res)

        self.assertEqual(6.0, res["systemSize"])
        self.assertEqual({"minimum": 4.0, "recommended": 6.0, "maximum": 7.0}, res["recommendedRange"])
        self.assertGreater(res["costs"]["total"], 0)

        inv = res["equipment"]["selectedInverter"]
        self.assertEqual("i6", inv["id"])
        self.assertGreaterEqual(inv["power"] * inv["count"], res["systemSize"])

        self.assertEqual(12, len(res["production"]["byMonth"]))
        self.assertEqual("1.0", res["metadata"]["calculationVersion"])
        self.assertEqual("Central Pakistan", res["metadata"]["location"])

    def test_costos_caso_tipico(self):
        res = ejecutar_cotizacion(self._payload(), fuente=_catalogo())
        costos = res["costs"]

        # 11 paneles de 550 W, 19.8 m2 => 18 m de cable
        self.assertEqual(11, res["equipment"]["selectedPanel"]["count"])
        self.assertEqual(423500, costos["panels"])
        self.assertEqual(135000, costos["inverter"])
        self.assertEqual(5400, costos["dcCable"])
        self.assertEqual(7200, costos["acCable"])
        self.assertEqual(88000, costos["mounting"])
        self.assertEqual(749100, costos["total"])

    def test_tamano_forzado_se_respeta(self):
        res = ejecutar_cotizacion(self._payload(forceSize=5), fuente=_catalogo())
        self.assertEqual(5.0, res["systemSize"])
        self.assertEqual(5.0, res["metadata"]["forceSize"])
        # el rango sigue saliendo del consumo, no del forzado
        self.assertEqual(6.0, res["recommendedRange"]["recommended"])

    def test_tamano_forzado_independiente_del_consumo(self):
        a = ejecutar_cotizacion({"monthlyUsage": 200, "forceSize": 7.3}, fuente=_catalogo())
        b = ejecutar_cotizacion({"monthlyUsage": 2000, "forceSize": 7.3}, fuente=_catalogo())
        self.assertEqual(7.3, a["systemSize"])
        self.assertEqual(7.3, b["systemSize"])

    def test_consumo_negativo_es_validacion(self):
        with self.assertRaises(ValidationError) as cm:
            ejecutar_cotizacion({"monthlyUsage": -10}, fuente=_catalogo())
        self.assertIn("monthly usage", str(cm.exception))

    def test_forzado_fuera_de_rango(self):
        with self.assertRaises(ValidationError) as cm:
            ejecutar_cotizacion(self._payload(forceSize=20), fuente=_catalogo())
        self.assertIn("between 1 and 15", str(cm.exception))

    def test_consumo_muy_alto_sin_inversor(self):
        with self.assertRaises(NoSuitableEquipmentError):
            ejecutar_cotizacion({"monthlyUsage": 10000}, fuente=_catalogo())

    def test_catalogo_vacio_usa_respaldo(self):
        vacio = CatalogoEnMemoria(paneles=[], inversores=[])
        with self.assertLogs("electrical.catalogos.catalogos", level="WARNING"):
            res = ejecutar_cotizacion(self._payload(), fuente=vacio)

        self.assertEqual(1, len(res["equipment"]["panelOptions"]))
        self.assertEqual("Default Panel", res["equipment"]["selectedPanel"]["brand"])
        self.assertEqual("Default Inverter", res["equipment"]["selectedInverter"]["brand"])

    def test_catalogo_caido_usa_respaldo(self):
        class FuenteCaida:
            def paneles_disponibles(self):
                raise ConnectionError("db down")

            def inversores_disponibles(self, potencia_min_kw):
                raise ConnectionError("db down")

        with self.assertLogs("electrical.catalogos.catalogos", level="WARNING"):
            res = ejecutar_cotizacion(self._payload(), fuente=FuenteCaida())
        self.assertEqual(1, len(res["equipment"]["panelOptions"]))
        self.assertGreater(res["costs"]["total"], 0)

    def test_propiedades_en_varios_consumos(self):
        componentes = ["panels", "inverter", "dcCable", "acCable", "mounting", "installation", "netMetering", "transport"]
        for uso in (50, 180, 333, 600, 925, 1200):
            with self.subTest(uso=uso):
                res = ejecutar_cotizacion(self._payload(monthlyUsage=uso), fuente=_catalogo())
                costos = res["costs"]
                self.assertEqual(costos["total"], sum(costos[k] for k in componentes))

                cons = res["consumption"]
                self.assertEqual(42, cons["peak"]["percentage"])
                self.assertEqual(round(uso), cons["peak"]["kWh"] + cons["offPeak"])

                for inv in res["equipment"]["inverters"]:
                    self.assertGreaterEqual(inv["power"] * inv["count"], res["systemSize"])

    def test_sizing_input_tipado(self):
        inp = SizingInput(monthly_usage_kwh=600, location=Ubicacion.CENTRAL_PAKISTAN)
        res = calcular_sizing_unificado(inp, fuente=_catalogo())
        self.assertEqual(6.0, res.tamano_sistema_kw)
        self.assertEqual(res.costos.total, res.a_dict()["costs"]["total"])

    def test_sizing_input_tipado_valida(self):
        with self.assertRaises(ValidationError):
            calcular_sizing_unificado(SizingInput(monthly_usage_kwh=0), fuente=_catalogo())


class TestResponder(unittest.TestCase):
    def test_200(self):
        status, body = responder({"monthlyUsage": 600}, fuente=_catalogo())
        self.assertEqual(200, status)
        self.assertIn("systemSize", body)

    def test_400_validacion(self):
        status, body = responder({"monthlyUsage": 600, "location": "Mars"}, fuente=_catalogo())
        self.assertEqual(400, status)
        self.assertEqual("ValidationError", body["errorType"])
        self.assertIn("Central Pakistan", body["error"])

    def test_400_sin_equipo(self):
        status, body = responder({"monthlyUsage": 10000}, fuente=_catalogo())
        self.assertEqual(400, status)
        self.assertEqual("NoSuitableEquipmentError", body["errorType"])

    def test_200_con_catalogo_que_lanza_error_propio(self):
        class FuenteDB:
            def paneles_disponibles(self):
                raise RuntimeError("PostgrestError: db unreachable")

            def inversores_disponibles(self, potencia_min_kw):
                raise RuntimeError("PostgrestError: db unreachable")

        with self.assertLogs("electrical.catalogos.catalogos", level="WARNING"):
            status, body = responder({"monthlyUsage": 600}, fuente=FuenteDB())
        self.assertEqual(200, status)
        self.assertEqual(1, len(body["equipment"]["panelOptions"]))
        self.assertEqual("Default Panel", body["equipment"]["selectedPanel"]["brand"])
        self.assertEqual("Default Inverter", body["equipment"]["selectedInverter"]["brand"])

    def test_400_consumo_que_desborda(self):
        status, body = responder({"monthlyUsage": 1.7e308}, fuente=_catalogo())
        self.assertEqual(400, status)
        self.assertEqual("ValidationError", body["errorType"])
        self.assertIn("too large", body["error"])

    def test_500_generico(self):
        with patch("core.orquestador.calcular_sizing_unificado", side_effect=RuntimeError("boom")):
            with self.assertLogs("core.orquestador", level="ERROR"):
                status, body = responder({"monthlyUsage": 600}, fuente=_catalogo())
        self.assertEqual(500, status)
        self.assertEqual(MENSAJE_ERROR_INTERNO, body["error"])
        self.assertNotIn("boom", body["error"])


if __name__ == "__main__":
    unittest.main()
