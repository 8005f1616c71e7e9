# screens/courses/constants.py
COL_NAME = "Nome do Curso"
COL_COORDINATOR_LOGIN = "Login do Coordenador"
COL_TUTOR_LOGIN = "Login do Tutor"

TEMPLATE_COLUMNS = [COL_NAME, COL_COORDINATOR_LOGIN, COL_TUTOR_LOGIN]
REQUIRED_COLUMNS = [COL_NAME, COL_COORDINATOR_LOGIN]

TEMPLATE_ROWS = [
    {COL_NAME: "Mestrado em Ciência da Computação", COL_COORDINATOR_LOGIN: "joao.silva", COL_TUTOR_LOGIN: "ana.costa"},
    {COL_NAME: "MBA em Marketing Digital", COL_COORDINATOR_LOGIN: "maria.santos", COL_TUTOR_LOGIN: ""},
]

TEMPLATE_FILE_NAME = "modelo_cursos.xlsx"
