from flask_restful import Resource


class HealthCheck(Resource):
    def get(self):
        return {"message": "Welcome to the institution admin portal API. The server is running."}, 200
